"""Configuration commands."""

import typer

from ..config.settings import get_settings
from .formatters import console, create_table

config_app = typer.Typer(help="Inspect configuration settings")


@config_app.command()
def show() -> None:
    """Show current configuration.

    Values come from MEDIA_DEDUP_* environment variables or a .env file.
    """
    settings = get_settings()

    table = create_table(title="Configuration")
    table.add_column("Setting", style="cyan", width=24)
    table.add_column("Value", style="white")

    table.add_row("Output directory", str(settings.output_dir))
    table.add_row("Checksum ledger", str(settings.ledger_path))
    table.add_row("Action script", str(settings.script_path))
    table.add_row("Media extensions", ", ".join(settings.media_extensions))
    table.add_row("Classification mode", settings.classification_mode.value)
    table.add_row("Keep strategy", settings.keep_strategy)
    table.add_row("On read error", settings.on_read_error.value)
    table.add_row("Hash workers", str(settings.hash_workers))
    table.add_row("Strict renames", str(settings.strict_renames))
    table.add_row("Log level", settings.log_level)
    table.add_row("Log file", str(settings.log_file) if settings.log_file else "None")

    console.print(table)
