"""Classification of fingerprinted files into duplicate groups."""

from collections.abc import Iterable
from pathlib import Path

from ..actions.suffixes import has_noise_suffix
from ..common.exceptions import DetectionError
from ..common.logging import get_logger
from .models import (
    ChecksumGroup,
    ClassificationMode,
    ClassificationReport,
    MediaFile,
    Observation,
    SkippedFile,
)

logger = get_logger(__name__)


class ClassificationEngine:
    """Builds checksum groups and the same/cross-directory split.

    Files must be observed in a stable order (directory by directory, files
    sorted within a directory); the first file seen for a digest becomes the
    group's representative.

    In ``first-seen`` mode each later file is classified when it arrives, by
    comparing its directory to the representative's. The outcome for a file
    therefore depends on observation order across directories.

    In ``directory-set`` mode classification waits until :meth:`report`:
    every directory holding two or more copies gets a within-directory set,
    and a group touching several directories is also marked cross-directory.
    """

    def __init__(self, mode: ClassificationMode = ClassificationMode.DIRECTORY_SET) -> None:
        """Initialize classification engine.

        Args:
            mode: Classification mode
        """
        self.mode = ClassificationMode(mode)
        self._observations: list[Observation] = []
        self._groups: dict[str, ChecksumGroup] = {}
        self._seen_paths: set[Path] = set()
        self._skipped: list[SkippedFile] = []

        # Only maintained incrementally in first-seen mode
        self._dir_dupes: dict[str, dict[str, None]] = {}
        self._cross_dir: dict[str, None] = {}
        self._same_dir_count = 0
        self._cross_dir_count = 0

        self._suffixed_files = 0

    def observe(self, file: MediaFile, digest: str, size: int = 0) -> None:
        """Record one fingerprinted file.

        Args:
            file: Observed media file
            digest: Its content fingerprint
            size: Bytes read while fingerprinting

        Raises:
            DetectionError: If the same path is observed twice
        """
        if file.path in self._seen_paths:
            raise DetectionError(f"File observed twice: {file.path}")
        self._seen_paths.add(file.path)
        self._observations.append(Observation(file=file, digest=digest, size=size))

        if has_noise_suffix(file.name):
            self._suffixed_files += 1

        group = self._groups.get(digest)
        if group is None:
            self._groups[digest] = ChecksumGroup(digest=digest, files=[file])
            logger.debug(f"New checksum {digest[:8]}: {file.path}")
            return

        group.files.append(file)

        if self.mode is not ClassificationMode.FIRST_SEEN:
            return

        if file.directory == group.representative.directory:
            self._same_dir_count += 1
            self._dir_dupes.setdefault(file.directory, {})[digest] = None
            logger.debug(f"Same-directory duplicate of {group.representative.name}: {file.name}")
        else:
            self._cross_dir_count += 1
            self._cross_dir[digest] = None
            logger.debug(
                f"Cross-directory duplicate of {group.representative.path}: {file.path}"
            )

    def observe_all(self, observations: Iterable[Observation]) -> "ClassificationEngine":
        """Feed a sequence of observations in order."""
        for observation in observations:
            self.observe(observation.file, observation.digest, observation.size)
        return self

    def skip(self, path: Path, reason: str) -> None:
        """Record a file excluded from classification."""
        self._skipped.append(SkippedFile(path=path, reason=reason))

    def report(self) -> ClassificationReport:
        """Build the classification report for everything observed so far."""
        report = ClassificationReport(
            mode=self.mode,
            observations=list(self._observations),
            groups={d: ChecksumGroup(d, list(g.files)) for d, g in self._groups.items()},
            skipped=list(self._skipped),
            total_files=len(self._observations),
            unique_files=len(self._groups),
            suffixed_files=self._suffixed_files,
        )

        if self.mode is ClassificationMode.FIRST_SEEN:
            report.directory_duplicates = {
                directory: list(digests) for directory, digests in self._dir_dupes.items()
            }
            report.cross_directory = list(self._cross_dir)
            report.same_dir_dupes = self._same_dir_count
            report.cross_dir_dupes = self._cross_dir_count
        else:
            self._classify_by_directory_set(report)

        return report

    def _classify_by_directory_set(self, report: ClassificationReport) -> None:
        dir_dupes: dict[str, dict[str, None]] = {}
        cross_dir: dict[str, None] = {}
        same_count = 0
        cross_count = 0

        # Walk observations so the index keeps first-observed ordering
        for observation in report.observations:
            group = report.groups[observation.digest]
            if group.representative.path != observation.file.path or group.count < 2:
                continue

            directories = group.directories()
            for directory in directories:
                members = len(group.files_in(directory))
                if members >= 2:
                    dir_dupes.setdefault(directory, {})[group.digest] = None
                    same_count += members - 1

            if len(directories) > 1:
                cross_dir[group.digest] = None
                cross_count += len(directories) - 1

        report.directory_duplicates = {
            directory: list(digests) for directory, digests in dir_dupes.items()
        }
        report.cross_directory = list(cross_dir)
        report.same_dir_dupes = same_count
        report.cross_dir_dupes = cross_count


def classify(
    observations: Iterable[Observation],
    mode: ClassificationMode = ClassificationMode.DIRECTORY_SET,
) -> ClassificationReport:
    """Classify an in-memory sequence of observations."""
    return ClassificationEngine(mode).observe_all(observations).report()
