"""Report command for exporting the analysis."""

from pathlib import Path
from typing import Optional

import typer

from ..actions.strategies import get_strategy
from ..config.settings import get_settings
from ..detector.models import ClassificationMode, ReadErrorPolicy
from ..detector.pipeline import DetectionPipeline
from ..reporting.exporter import ReportExporter
from .formatters import print_error, print_info, print_success


def report(
    root: Path = typer.Argument(
        Path("."), help="Directory tree to analyze", exists=True, file_okay=False
    ),
    format: str = typer.Option(
        "json", "--format", "-f", help="Output format: csv or json"
    ),
    output: Path = typer.Option(
        ..., "--output", "-o", help="Output file path"
    ),
    mode: Optional[ClassificationMode] = typer.Option(
        None, "--mode", "-m", help="Duplicate classification: directory-set or first-seen"
    ),
    skip_unreadable: bool = typer.Option(
        False, "--skip-unreadable", help="Skip files that cannot be read"
    ),
) -> None:
    """Analyze a directory tree and export the planned actions.

    Nothing is written besides the report: no ledger and no script.
    """
    settings = get_settings()

    if format.lower() not in ["csv", "json"]:
        print_error(f"Invalid format: {format}. Must be 'csv' or 'json'")
        raise typer.Exit(1)

    try:
        pipeline = DetectionPipeline(
            root,
            extensions=settings.media_extensions,
            mode=mode or settings.classification_mode,
            on_read_error=ReadErrorPolicy.SKIP if skip_unreadable else settings.on_read_error,
            hash_workers=settings.hash_workers,
            strategy=get_strategy(settings.keep_strategy),
            strict_renames=settings.strict_renames,
        )
        result = pipeline.run()

        if result.report.total_files == 0:
            print_info("No media files found!")
            return

        exporter = ReportExporter()

        if format.lower() == "csv":
            exporter.export_csv(result, output)
        else:
            exporter.export_json(result, output)

        summary = result.summary()
        print_success(f"Exported report to: {output}")
        print_info(f"Files: {summary.total_files}")
        print_info(f"Within-directory duplicates: {summary.same_dir_dupes}")
        print_info(f"Cross-directory duplicates: {summary.cross_dir_dupes}")
        print_info(f"Renames: {summary.rename_candidates}")

    except Exception as e:
        print_error(f"Report export failed: {e}")
        raise typer.Exit(1)
