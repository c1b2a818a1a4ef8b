"""Local directory discovery for media files."""

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Callable, Optional

from ..common.constants import VIDEO_FORMATS
from ..common.exceptions import FileAccessError
from ..common.logging import get_logger

logger = get_logger(__name__)


class MediaDiscovery:
    """Finds directories and files with media extensions under a root."""

    def __init__(self, root: Path, extensions: Iterable[str] = VIDEO_FORMATS) -> None:
        """Initialize discovery.

        Args:
            root: Directory to scan
            extensions: Media extensions, without dots (case-insensitive)
        """
        self.root = root
        self.extensions = {ext.lower().lstrip(".") for ext in extensions}

    def is_media(self, path: Path) -> bool:
        """Check whether a path has a media extension."""
        return path.suffix.lower().lstrip(".") in self.extensions

    def find_media_dirs(
        self, on_error: Optional[Callable[[FileAccessError], None]] = None
    ) -> list[Path]:
        """Find the root plus every directory directly holding media files.

        Directories are walked in sorted order without following symlinks.

        Args:
            on_error: Called with the error for each unlistable directory;
                the walk continues past it. Without a handler the error is raised.

        Returns:
            Directories to process, root first

        Raises:
            FileAccessError: If a directory cannot be listed and no handler is given
        """
        logger.info(f"Identifying directories containing media files under {self.root}")
        dirs = [self.root]

        def walk_error(error: OSError) -> None:
            access_error = FileAccessError(
                Path(error.filename or self.root), error.strerror or str(error)
            )
            if on_error is None:
                raise access_error
            on_error(access_error)

        for dirpath, dirnames, filenames in os.walk(self.root, onerror=walk_error):
            dirnames.sort()
            current = Path(dirpath)
            if current == self.root:
                continue
            if any(
                self.is_media(Path(name)) and (current / name).is_file()
                for name in filenames
            ):
                dirs.append(current)

        logger.info(f"Found {len(dirs)} directories to examine")
        return dirs

    def list_media_files(self, directory: Path) -> list[Path]:
        """List regular media files directly inside a directory, sorted by name.

        Raises:
            FileAccessError: If the directory cannot be listed
        """
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise FileAccessError(directory, e.strerror or str(e)) from e

        files = [p for p in entries if self.is_media(p) and p.is_file()]
        logger.debug(f"Found {len(files)} media files in {directory}")
        return files
