"""Planning of suffix-stripping renames for same-directory duplicates."""

from pathlib import Path
from typing import Callable, Optional

from ..common.exceptions import AmbiguousRenameError
from ..common.logging import get_logger
from ..detector.models import (
    ClassificationReport,
    ConflictReason,
    MediaFile,
    Observation,
    RenamePlanEntry,
)
from .suffixes import has_noise_suffix, hashed_name, split_name, strip_noise_suffix

logger = get_logger(__name__)


class RenamePlanner:
    """Plans renames that remove numeric suffixes without name collisions.

    Only files that are themselves within-directory duplicates are
    considered. A cleaned name is rejected if another planned rename in the
    same directory already targets it or if something with that name exists
    on disk. A rejected name gets one retry with a short digest inserted;
    if that collides too the rename is ambiguous.
    """

    def __init__(
        self,
        strict: bool = False,
        exists: Optional[Callable[[Path], bool]] = None,
    ) -> None:
        """Initialize rename planner.

        Args:
            strict: Raise AmbiguousRenameError instead of flagging the entry
            exists: Filesystem existence check, defaults to Path.exists
        """
        self.strict = strict
        self.exists = exists or Path.exists

    def candidates(self, report: ClassificationReport) -> dict[str, list[Observation]]:
        """Collect rename candidates grouped by directory.

        Args:
            report: Classification report

        Returns:
            Directory mapped to candidate observations in observed order
        """
        by_directory: dict[str, list[Observation]] = {}
        for observation in report.observations:
            file = observation.file
            if not has_noise_suffix(file.name):
                continue
            if not report.is_directory_duplicate(observation.digest, file.directory):
                continue
            by_directory.setdefault(file.directory, []).append(observation)
        return by_directory

    def plan(self, report: ClassificationReport) -> list[RenamePlanEntry]:
        """Plan renames for every candidate.

        Args:
            report: Classification report

        Returns:
            Rename plan entries, grouped by directory

        Raises:
            AmbiguousRenameError: In strict mode, if a hashed name collides
        """
        entries: list[RenamePlanEntry] = []

        for directory, observations in self.candidates(report).items():
            planned: dict[str, MediaFile] = {}
            for observation in observations:
                entry = self._plan_one(observation, planned)
                if entry is None:
                    continue
                planned[entry.target_name] = entry.file
                entries.append(entry)

            logger.debug(f"Planned {len(planned)} renames in {directory or 'root'}")

        conflicts = sum(1 for e in entries if e.conflict)
        logger.info(f"Rename plan: {len(entries)} renames ({conflicts} disambiguated)")
        return entries

    def _plan_one(
        self, observation: Observation, planned: dict[str, MediaFile]
    ) -> Optional[RenamePlanEntry]:
        file = observation.file
        clean = strip_noise_suffix(file.name)

        base, _ = split_name(clean)
        if not base:
            logger.debug(f"Not renaming {file.name}: nothing left after stripping suffix")
            return None

        entry = RenamePlanEntry(file=file, digest=observation.digest, clean_name=clean)
        entry.conflict_reason = self._conflict(file, clean, planned)
        if entry.conflict_reason is None:
            return entry

        entry.hashed_name = hashed_name(clean, observation.digest)
        if self._conflict(file, entry.hashed_name, planned) is not None:
            holder = planned.get(entry.hashed_name)
            error = AmbiguousRenameError(
                file.path, entry.hashed_name, holder.name if holder else None
            )
            if self.strict:
                raise error
            logger.warning(str(error))
            entry.ambiguous = True
        else:
            logger.debug(
                f"{clean} unavailable ({entry.conflict_reason.value}), "
                f"using {entry.hashed_name}"
            )

        return entry

    def _conflict(
        self, file: MediaFile, name: str, planned: dict[str, MediaFile]
    ) -> Optional[ConflictReason]:
        if name in planned:
            return ConflictReason.PLANNED_NAME

        target = file.path.parent / name
        if target != file.path and self.exists(target):
            return ConflictReason.EXISTING_FILE

        return None
