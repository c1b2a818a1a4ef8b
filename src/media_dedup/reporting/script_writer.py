"""Generation of the reviewable action script."""

import os
import shlex
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..common.logging import get_logger
from ..detector.models import AnalysisResult, DuplicateSet, MediaFile, RenamePlanEntry

logger = get_logger(__name__)

SECTION_RULE = "###"


def _backup_target(file: MediaFile) -> str:
    relative = f"{file.directory}/{file.name}" if file.directory else file.name
    return f'"$BACKUP_DIR"/{shlex.quote(relative)}'


def _backup_dir(directory: str) -> str:
    if not directory:
        return '"$BACKUP_DIR"'
    return f'"$BACKUP_DIR"/{shlex.quote(directory)}'


def _commented(lines: list[str]) -> list[str]:
    return [f"# {line}" for line in lines]


class ActionScriptWriter:
    """Writes the bash script a user reviews before anything is touched.

    The script backs up every file before removing or renaming it.
    Cross-directory duplicates are listed commented out so nothing there
    runs without a manual edit.
    """

    def __init__(
        self,
        script_path: Path,
        backup_parent: Optional[Path] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Initialize script writer.

        Args:
            script_path: Where to write the script
            backup_parent: Directory that will hold the backup folder
                (defaults to the script's directory)
            now: Generation time (defaults to the current time)
        """
        self.script_path = script_path
        self.backup_parent = backup_parent or script_path.parent
        self.now = now or datetime.now()

    def write(self, result: AnalysisResult) -> Path:
        """Render the script to disk and make it executable.

        Args:
            result: Analysis result to turn into commands

        Returns:
            Path to the written script
        """
        self.script_path.parent.mkdir(parents=True, exist_ok=True)
        self.script_path.write_text("\n".join(self.render(result)) + "\n", encoding="utf-8")

        if os.name == "posix":
            self.script_path.chmod(0o755)

        logger.info(f"Wrote action script to {self.script_path}")
        return self.script_path

    def render(self, result: AnalysisResult) -> list[str]:
        """Render the script as a list of lines."""
        lines = self._header(result)
        lines += self._within_directory_section(result)
        lines += self._cross_directory_section(result)
        lines += self._rename_section(result)
        return lines

    def _header(self, result: AnalysisResult) -> list[str]:
        backup_dir = self.backup_parent / f"backup_{self.now:%Y%m%d_%H%M%S}"
        return [
            "#!/usr/bin/env bash",
            "",
            "# WARNING: This script contains potentially destructive operations",
            "# Review carefully before running!",
            f"# Generated on {self.now:%Y-%m-%d %H:%M:%S}",
            f"# Scanned directory: {result.root}",
            "",
            "# Exit on first error",
            "set -e",
            "",
            f"BACKUP_DIR={shlex.quote(str(backup_dir))}",
            'mkdir -p "$BACKUP_DIR"',
            "",
            "# Operations are grouped by directory for easier review",
            "",
        ]

    def _within_directory_section(self, result: AnalysisResult) -> list[str]:
        lines = [SECTION_RULE, "# Within-Directory Duplicates", SECTION_RULE, ""]

        by_directory: dict[str, list[DuplicateSet]] = {}
        for duplicate_set in result.duplicate_sets:
            by_directory.setdefault(duplicate_set.directory, []).append(duplicate_set)

        for directory, duplicate_sets in by_directory.items():
            display = duplicate_sets[0].keeper.display_directory
            lines += [f"# Processing directory: {display}", f"mkdir -p {_backup_dir(directory)}", ""]

            for duplicate_set in duplicate_sets:
                lines.append(f"# Duplicate set with checksum: {duplicate_set.short_digest}...")
                lines.append(f"# Keeping: {duplicate_set.keeper.name}")
                for file in duplicate_set.removals:
                    lines += [
                        f"# Backup and remove: {file.name}",
                        f"cp {shlex.quote(str(file.path))} {_backup_target(file)}",
                        f"rm {shlex.quote(str(file.path))}",
                    ]
                lines.append("")

        return lines

    def _cross_directory_section(self, result: AnalysisResult) -> list[str]:
        lines = [
            "",
            SECTION_RULE,
            "# Cross-Directory Duplicates",
            SECTION_RULE,
            "",
            "# WARNING: These are duplicates across different directories.",
            "# They are not removed automatically as they may serve different purposes.",
            "# Review and uncomment the commands below if you want to remove them.",
            "",
        ]

        removed = result.removal_paths()
        keepers = {(s.directory, s.digest): s.keeper for s in result.duplicate_sets}

        for group in result.cross_directory_groups:
            first = group.representative
            anchor = first
            if first.path in removed:
                anchor = keepers[(first.directory, group.digest)]
            lines += [
                f"# Duplicate set with checksum: {group.short_digest}...",
                f"# First encountered: {first.name} in {first.display_directory}",
            ]
            if anchor is not first:
                lines.append(f"# Keeping: {anchor.name} in {anchor.display_directory}")
            lines.append("# Other copies:")
            for file in group.others:
                if file.path == anchor.path:
                    continue
                if file.path in removed:
                    lines += [f"# {file.name} in {file.display_directory}: removed above as a duplicate", "#"]
                    continue
                lines.append(f"# {file.name} in {file.display_directory}")
                lines += _commented([
                    f"mkdir -p {_backup_dir(file.directory)}",
                    f"cp {shlex.quote(str(file.path))} {_backup_target(file)}",
                    f"rm {shlex.quote(str(file.path))}",
                ])
                lines.append("#")
            lines.append("")

        return lines

    def _rename_section(self, result: AnalysisResult) -> list[str]:
        lines = [
            "",
            SECTION_RULE,
            "# Filename Cleanup (Remove Numeric Suffixes)",
            SECTION_RULE,
            "",
            "# Files with numeric suffixes are renamed to cleaner versions.",
            "# Names already taken get a short checksum appended instead.",
            "",
        ]

        removed = result.removal_paths()
        by_directory: dict[str, list[RenamePlanEntry]] = {}
        for entry in result.rename_plan:
            by_directory.setdefault(entry.file.directory, []).append(entry)

        for directory, entries in by_directory.items():
            display = entries[0].file.display_directory
            lines += [f"# Directory: {display}", f"mkdir -p {_backup_dir(directory)}", ""]

            for entry in entries:
                lines += self._rename_commands(entry, removed)
                lines.append("")

        return lines

    def _rename_commands(self, entry: RenamePlanEntry, removed: set[Path]) -> list[str]:
        file = entry.file
        commands = [
            f"cp {shlex.quote(str(file.path))} {_backup_target(file)}",
            f"mv {shlex.quote(str(file.path))} {shlex.quote(str(entry.target_path))}",
        ]

        if file.path in removed:
            return [f"# Skipped rename of {file.name}: removed above as a duplicate"]
        if entry.ambiguous:
            return [
                f"# Ambiguous rename, {entry.target_name} is already taken: {file.name}",
                *_commented(commands),
            ]
        if entry.conflict:
            return [f"# Rename with hash due to conflict: {file.name} -> {entry.target_name}", *commands]
        return [f"# Rename to remove suffix: {file.name} -> {entry.target_name}", *commands]
