"""Scan command."""

from pathlib import Path
from typing import Optional

import typer

from ..actions.strategies import get_strategy
from ..common.exceptions import FileAccessError, MediaDedupError
from ..config.settings import get_settings
from ..detector.models import ClassificationMode, ReadErrorPolicy
from ..detector.pipeline import DetectionPipeline
from ..reporting.script_writer import ActionScriptWriter
from ..scanner.ledger import ChecksumLedger
from .formatters import (
    console,
    create_progress,
    create_table,
    format_stats,
    format_summary,
    print_error,
    print_info,
    print_panel,
    print_success,
    print_warning,
)


def scan(
    root: Path = typer.Argument(
        Path("."), help="Directory tree to scan", exists=True, file_okay=False
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Where to write the ledger and action script"
    ),
    mode: Optional[ClassificationMode] = typer.Option(
        None, "--mode", "-m", help="Duplicate classification: directory-set or first-seen"
    ),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Keeper strategy: clean-name, first-seen"
    ),
    skip_unreadable: Optional[bool] = typer.Option(
        None,
        "--skip-unreadable/--abort-on-unreadable",
        help="Skip files that cannot be read instead of stopping",
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Threads used for fingerprinting"
    ),
    strict_renames: Optional[bool] = typer.Option(
        None,
        "--strict-renames/--flag-ambiguous-renames",
        help="Fail when a disambiguated rename still collides",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be scanned without scanning"
    ),
) -> None:
    """Scan a directory tree and write a reviewable action script."""
    settings = get_settings()

    output_dir = output_dir or settings.output_dir
    mode = mode or settings.classification_mode
    workers = workers or settings.hash_workers
    if strict_renames is None:
        strict_renames = settings.strict_renames
    if skip_unreadable is None:
        policy = settings.on_read_error
    else:
        policy = ReadErrorPolicy.SKIP if skip_unreadable else ReadErrorPolicy.ABORT

    try:
        keeper_strategy = get_strategy(strategy or settings.keep_strategy)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if dry_run:
        print_info("Dry run mode - no files will be read")
        print_info(f"Directory: {root.resolve()}")
        print_info(f"Extensions: {', '.join(settings.media_extensions)}")
        print_info(f"Classification: {mode.value}")
        print_info(f"Output directory: {output_dir}")
        return

    try:
        ledger = ChecksumLedger(output_dir / settings.ledger_name)
        pipeline = DetectionPipeline(
            root,
            extensions=settings.media_extensions,
            mode=mode,
            on_read_error=policy,
            hash_workers=workers,
            strategy=keeper_strategy,
            strict_renames=strict_renames,
            ledger=ledger,
        )

        print_info(f"Working directory: {pipeline.root}")
        progress = create_progress()

        with progress:
            task = progress.add_task("[cyan]Fingerprinting media files...", total=None)
            result = pipeline.run(on_file=lambda _: progress.advance(task))
            progress.update(task, description="[green]Fingerprinting complete!")

        script_path = ActionScriptWriter(output_dir / settings.script_name).write(result)

        summary = result.summary()
        print_panel("Deduplication Analysis", format_summary(summary), style="green")
        print_panel("Performance", format_stats(result.stats))

        for skipped in result.report.skipped:
            print_warning(f"Skipped {skipped.path}: {skipped.reason}")

        ambiguous = [e for e in result.rename_plan if e.ambiguous]
        if ambiguous:
            print_warning(
                f"{len(ambiguous)} renames could not be disambiguated and are "
                "commented out in the script"
            )

        if result.duplicate_sets:
            print_info("\nWithin-directory duplicate sets (first 10):")

            table = create_table()
            table.add_column("Directory", style="cyan")
            table.add_column("Checksum", style="yellow", width=10)
            table.add_column("Keep", style="green")
            table.add_column("Remove", style="red", width=8)

            for duplicate_set in result.duplicate_sets[:10]:
                table.add_row(
                    duplicate_set.keeper.display_directory,
                    duplicate_set.short_digest,
                    duplicate_set.keeper.name[:50],
                    str(len(duplicate_set.removals)),
                )

            console.print(table)

        print_success(f"All checksums have been saved to: {ledger.ledger_path}")
        print_info(
            "Files are compared by 64-bit XXH3 checksum; different content with an "
            "equal checksum would be reported as a duplicate."
        )
        print_warning(f"Potentially destructive operations have been written to: {script_path}")
        print_info("Review the script carefully, then run: bash " + str(script_path))

    except FileAccessError as e:
        print_error(f"Cannot read {e.path}: {e.reason}")
        print_info("Rerun with --skip-unreadable to continue past unreadable files")
        raise typer.Exit(1)
    except MediaDedupError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(1)
