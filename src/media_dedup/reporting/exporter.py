"""CSV and JSON export functionality."""

import csv
import json
from dataclasses import asdict
from pathlib import Path

from ..common.logging import get_logger
from ..detector.models import AnalysisResult, MediaFile

logger = get_logger(__name__)


def _file_data(file: MediaFile) -> dict[str, str]:
    return {"path": str(file.path), "directory": file.directory, "name": file.name}


class ReportExporter:
    """Exports an analysis result to CSV or JSON."""

    def export_csv(self, result: AnalysisResult, output_path: Path) -> None:
        """Export planned actions to CSV, one row per file.

        Args:
            result: Analysis result
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="") as f:
            writer = csv.writer(f)

            # Header
            writer.writerow(["action", "directory", "checksum", "path", "target"])

            # Data
            for duplicate_set in result.duplicate_sets:
                writer.writerow([
                    "keep",
                    duplicate_set.directory,
                    duplicate_set.digest,
                    duplicate_set.keeper.path,
                    "",
                ])
                for file in duplicate_set.removals:
                    writer.writerow(["remove", file.directory, duplicate_set.digest, file.path, ""])

            for group in result.cross_directory_groups:
                for file in group.others:
                    writer.writerow([
                        "review",
                        file.directory,
                        group.digest,
                        file.path,
                        group.representative.path,
                    ])

            for entry in result.rename_plan:
                writer.writerow([
                    "rename-ambiguous" if entry.ambiguous else "rename",
                    entry.file.directory,
                    entry.digest,
                    entry.file.path,
                    entry.target_path,
                ])

        logger.info(f"Exported analysis to CSV: {output_path}")

    def export_json(self, result: AnalysisResult, output_path: Path) -> None:
        """Export the full analysis to JSON.

        Args:
            result: Analysis result
            output_path: Output file path
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "root": str(result.root),
            "classification_mode": result.report.mode.value,
            "summary": asdict(result.summary()),
            "bytes_processed": result.stats.bytes_processed,
            "within_directory": [
                {
                    "directory": s.directory,
                    "checksum": s.digest,
                    "keep": _file_data(s.keeper),
                    "remove": [_file_data(f) for f in s.removals],
                }
                for s in result.duplicate_sets
            ],
            "cross_directory": [
                {
                    "checksum": g.digest,
                    "first_encountered": _file_data(g.representative),
                    "others": [_file_data(f) for f in g.others],
                }
                for g in result.cross_directory_groups
            ],
            "renames": [
                {
                    "file": _file_data(e.file),
                    "checksum": e.digest,
                    "clean_name": e.clean_name,
                    "target_name": e.target_name,
                    "conflict": e.conflict,
                    "conflict_reason": e.conflict_reason.value if e.conflict_reason else None,
                    "ambiguous": e.ambiguous,
                }
                for e in result.rename_plan
            ],
            "skipped": [
                {"path": str(s.path), "reason": s.reason} for s in result.report.skipped
            ],
        }

        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported analysis to JSON: {output_path}")
