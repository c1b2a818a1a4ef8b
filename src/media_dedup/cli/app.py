"""Main CLI application."""

import typer
from rich.markup import escape

from ..common.exceptions import ConfigError
from ..common.logging import setup_logging
from ..config.settings import get_settings
from .config_cmd import config_app
from .formatters import print_error
from .report_cmd import report
from .scan_cmd import scan

app = typer.Typer(
    name="media-dedup",
    help="Find duplicate media files and plan their cleanup",
    add_completion=False,
)

# Register subcommands
app.add_typer(config_app, name="config")

# Add main commands
app.command(name="scan")(scan)
app.command(name="report")(report)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Media file deduplication tool.

    Nothing is deleted or renamed: scan writes a script for you to review.
    """
    try:
        settings = get_settings()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, log_file=settings.log_file)
