"""Custom exception hierarchy."""

from pathlib import Path
from typing import Optional


class MediaDedupError(Exception):
    """Base exception for all media-dedup errors."""


class FileAccessError(MediaDedupError):
    """A media file could not be read or a directory could not be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LedgerError(MediaDedupError):
    """The fingerprint ledger could not be written."""


class DetectionError(MediaDedupError):
    """Error during duplicate classification."""


class AmbiguousRenameError(MediaDedupError):
    """A disambiguated rename target still collides with another name."""

    def __init__(self, path: Path, target: str, existing: Optional[str] = None) -> None:
        message = f"Cannot rename {path.name}: target {target} is already taken"
        if existing:
            message += f" by {existing}"
        super().__init__(message)
        self.path = path
        self.target = target


class ConfigError(MediaDedupError):
    """Configuration error."""
