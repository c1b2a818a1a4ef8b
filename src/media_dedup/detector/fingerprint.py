"""Content fingerprints for media files."""

import time
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from threading import Lock
from typing import Union

import xxhash

from ..common.constants import READ_CHUNK_SIZE
from ..common.exceptions import FileAccessError
from ..common.logging import get_logger

logger = get_logger(__name__)


def fingerprint(path: Path, chunk_size: int = READ_CHUNK_SIZE) -> tuple[str, int]:
    """Hash the complete contents of a file.

    Args:
        path: File to hash
        chunk_size: Read size in bytes

    Returns:
        Tuple of (16-character hex XXH3-64 digest, bytes read)

    Raises:
        FileAccessError: If the file cannot be opened or read completely
    """
    hasher = xxhash.xxh3_64()
    bytes_read = 0

    try:
        expected = path.stat().st_size
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
                bytes_read += len(chunk)
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e

    if bytes_read != expected:
        raise FileAccessError(
            path, f"read {bytes_read} bytes but file size is {expected}"
        )

    return hasher.hexdigest(), bytes_read


FingerprintResult = Union[tuple[str, int], FileAccessError]


class Fingerprinter:
    """Fingerprints files and keeps throughput counters."""

    def __init__(self, workers: int = 1, chunk_size: int = READ_CHUNK_SIZE) -> None:
        """Initialize fingerprinter.

        Args:
            workers: Threads used by fingerprint_many
            chunk_size: Read size in bytes
        """
        self.workers = max(1, workers)
        self.chunk_size = chunk_size
        self.bytes_processed = 0
        self.hashing_seconds = 0.0
        self.lock = Lock()

    def fingerprint(self, path: Path) -> tuple[str, int]:
        """Fingerprint a single file and update counters."""
        start = time.perf_counter()
        digest, size = fingerprint(path, self.chunk_size)
        elapsed = time.perf_counter() - start

        with self.lock:
            self.bytes_processed += size
            self.hashing_seconds += elapsed

        return digest, size

    def fingerprint_many(
        self, paths: list[Path]
    ) -> Iterator[tuple[Path, FingerprintResult]]:
        """Fingerprint files, yielding results in input order.

        Errors are yielded in place of the result so the caller decides
        whether to abort or skip.
        """
        if self.workers == 1 or len(paths) < 2:
            for path in paths:
                yield path, self._try_fingerprint(path)
            return

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures: list[tuple[Path, Future[FingerprintResult]]] = [
                (path, executor.submit(self._try_fingerprint, path)) for path in paths
            ]
            for path, future in futures:
                yield path, future.result()

    def _try_fingerprint(self, path: Path) -> FingerprintResult:
        try:
            return self.fingerprint(path)
        except FileAccessError as e:
            return e
