"""Data models for media files, duplicate groups and planned actions."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ..common.constants import ROOT_DISPLAY_NAME, SHORT_HASH_LENGTH


class ClassificationMode(str, Enum):
    """How duplicates are split into same-directory and cross-directory."""

    FIRST_SEEN = "first-seen"
    DIRECTORY_SET = "directory-set"


class ReadErrorPolicy(str, Enum):
    """What to do when a media file cannot be fingerprinted."""

    ABORT = "abort"
    SKIP = "skip"


class ConflictReason(str, Enum):
    """Why a cleaned filename could not be used as-is."""

    PLANNED_NAME = "planned-name"
    EXISTING_FILE = "existing-file"


@dataclass(frozen=True)
class MediaFile:
    """A media file observed during a run."""

    path: Path
    directory: str

    @classmethod
    def from_path(cls, path: Path, root: Path) -> "MediaFile":
        """Build a MediaFile with its directory relative to the scan root.

        Files outside the root keep their absolute parent directory.
        """
        try:
            relative = path.parent.relative_to(root)
        except ValueError:
            return cls(path=path, directory=path.parent.as_posix())
        directory = "" if relative == Path(".") else relative.as_posix()
        return cls(path=path, directory=directory)

    @property
    def name(self) -> str:
        """Filename including extension."""
        return self.path.name

    @property
    def extension(self) -> str:
        """Lowercase extension without the leading dot."""
        return self.path.suffix.lower().lstrip(".")

    @property
    def display_directory(self) -> str:
        """Directory name for humans ("root" for the scan root)."""
        return self.directory or ROOT_DISPLAY_NAME


@dataclass(frozen=True)
class Observation:
    """A (file, fingerprint) pair fed to the classification engine."""

    file: MediaFile
    digest: str
    size: int = 0


@dataclass
class ChecksumGroup:
    """All files sharing one fingerprint, in first-observed order."""

    digest: str
    files: list[MediaFile] = field(default_factory=list)

    @property
    def representative(self) -> MediaFile:
        """The first file observed with this fingerprint."""
        return self.files[0]

    @property
    def count(self) -> int:
        """Number of files in this group."""
        return len(self.files)

    @property
    def short_digest(self) -> str:
        return self.digest[:SHORT_HASH_LENGTH]

    def directories(self) -> list[str]:
        """Distinct member directories in first-observed order."""
        return list(dict.fromkeys(f.directory for f in self.files))

    def files_in(self, directory: str) -> list[MediaFile]:
        """Members located in the given directory."""
        return [f for f in self.files if f.directory == directory]


@dataclass(frozen=True)
class SkippedFile:
    """A file left out of the run because it could not be read."""

    path: Path
    reason: str


@dataclass
class ClassificationReport:
    """Result of one classification pass."""

    mode: ClassificationMode
    observations: list[Observation] = field(default_factory=list)
    groups: dict[str, ChecksumGroup] = field(default_factory=dict)
    directory_duplicates: dict[str, list[str]] = field(default_factory=dict)
    cross_directory: list[str] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    total_files: int = 0
    unique_files: int = 0
    same_dir_dupes: int = 0
    cross_dir_dupes: int = 0
    suffixed_files: int = 0

    def group(self, digest: str) -> ChecksumGroup:
        """Get the checksum group for a digest."""
        return self.groups[digest]

    def representative(self, digest: str) -> MediaFile:
        """Get the representative file for a digest."""
        return self.groups[digest].representative

    def is_directory_duplicate(self, digest: str, directory: str) -> bool:
        """Check whether a digest is a within-directory duplicate in directory."""
        return digest in self.directory_duplicates.get(directory, ())


@dataclass
class DuplicateSet:
    """Identical files inside one directory, with the copy to keep."""

    directory: str
    digest: str
    files: list[MediaFile]
    keeper: MediaFile

    @property
    def removals(self) -> list[MediaFile]:
        """Files to back up and remove (never the keeper)."""
        return [f for f in self.files if f.path != self.keeper.path]

    @property
    def short_digest(self) -> str:
        return self.digest[:SHORT_HASH_LENGTH]


@dataclass
class CrossDirectoryGroup:
    """Identical files spread across directories, anchored on the representative."""

    digest: str
    representative: MediaFile
    others: list[MediaFile]

    @property
    def short_digest(self) -> str:
        return self.digest[:SHORT_HASH_LENGTH]


@dataclass
class RenamePlanEntry:
    """A planned rename that strips a noise suffix."""

    file: MediaFile
    digest: str
    clean_name: str
    hashed_name: Optional[str] = None
    conflict_reason: Optional[ConflictReason] = None
    ambiguous: bool = False

    @property
    def conflict(self) -> bool:
        """True if the clean name was taken and a hashed name is used."""
        return self.conflict_reason is not None

    @property
    def target_name(self) -> str:
        """Name the file should be renamed to."""
        if self.conflict and self.hashed_name:
            return self.hashed_name
        return self.clean_name

    @property
    def target_path(self) -> Path:
        return self.file.path.parent / self.target_name


@dataclass
class ScanStats:
    """Throughput figures for a run."""

    bytes_processed: int = 0
    hashing_seconds: float = 0.0
    elapsed_seconds: float = 0.0

    @property
    def throughput(self) -> float:
        """Bytes hashed per second of hashing time."""
        if self.hashing_seconds <= 0:
            return 0.0
        return self.bytes_processed / self.hashing_seconds


@dataclass(frozen=True)
class ScanSummary:
    """Plain counters for the reporting layer."""

    total_files: int
    unique_files: int
    same_dir_dupes: int
    cross_dir_dupes: int
    rename_candidates: int
    suffixed_files: int
    skipped_files: int


@dataclass
class AnalysisResult:
    """Everything a run decided, ready for script emission and export."""

    root: Path
    report: ClassificationReport
    duplicate_sets: list[DuplicateSet]
    cross_directory_groups: list[CrossDirectoryGroup]
    rename_plan: list[RenamePlanEntry]
    directories: list[Path] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)

    def summary(self) -> ScanSummary:
        """Summarize the run as plain integers."""
        return ScanSummary(
            total_files=self.report.total_files,
            unique_files=self.report.unique_files,
            same_dir_dupes=self.report.same_dir_dupes,
            cross_dir_dupes=self.report.cross_dir_dupes,
            rename_candidates=len(self.rename_plan),
            suffixed_files=self.report.suffixed_files,
            skipped_files=len(self.report.skipped),
        )

    def removal_paths(self) -> set[Path]:
        """Paths scheduled for backup-and-remove."""
        return {f.path for s in self.duplicate_sets for f in s.removals}
