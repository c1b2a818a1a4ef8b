"""Append-only checksum ledger."""

import shutil
from collections.abc import Iterator
from pathlib import Path
from typing import Optional, TextIO

from ..common.constants import LEDGER_BACKUP_SUFFIX
from ..common.exceptions import LedgerError
from ..common.logging import get_logger

logger = get_logger(__name__)


class ChecksumLedger:
    """Text file with one ``<digest>  <path>`` line per fingerprinted file.

    The ledger is a record of the run, not a cache: :meth:`reset` backs up
    any previous contents and starts empty.
    """

    def __init__(self, ledger_path: Path) -> None:
        """Initialize ledger.

        Args:
            ledger_path: Path to the ledger file
        """
        self.ledger_path = ledger_path
        self._handle: Optional[TextIO] = None

    @property
    def backup_path(self) -> Path:
        """Where the previous run's ledger is copied."""
        return self.ledger_path.with_name(self.ledger_path.name + LEDGER_BACKUP_SUFFIX)

    def reset(self) -> Optional[Path]:
        """Back up an existing ledger and truncate it.

        Returns:
            Backup path if a previous ledger existed, else None

        Raises:
            LedgerError: If the ledger cannot be backed up or truncated
        """
        backup = None
        try:
            self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
            if self.ledger_path.exists():
                shutil.copy2(self.ledger_path, self.backup_path)
                backup = self.backup_path
                logger.info(f"Backed up previous checksum ledger to {backup}")
            self.ledger_path.write_text("", encoding="utf-8")
        except OSError as e:
            raise LedgerError(f"Cannot reset ledger {self.ledger_path}: {e}") from e

        logger.debug(f"Starting fresh checksum ledger at {self.ledger_path}")
        return backup

    def open(self) -> "ChecksumLedger":
        """Open the ledger for appending."""
        try:
            self._handle = open(self.ledger_path, "a", encoding="utf-8")
        except OSError as e:
            raise LedgerError(f"Cannot open ledger {self.ledger_path}: {e}") from e
        return self

    def close(self) -> None:
        """Close the ledger."""
        if self._handle:
            self._handle.close()
            self._handle = None

    def append(self, digest: str, path: Path) -> None:
        """Record one fingerprint.

        Raises:
            LedgerError: If the line cannot be written
        """
        line = f"{digest}  {path}\n"
        try:
            if self._handle:
                self._handle.write(line)
            else:
                with open(self.ledger_path, "a", encoding="utf-8") as f:
                    f.write(line)
        except OSError as e:
            raise LedgerError(f"Cannot write to ledger {self.ledger_path}: {e}") from e

    def entries(self) -> Iterator[tuple[str, Path]]:
        """Read back (digest, path) pairs."""
        if not self.ledger_path.exists():
            return
        with open(self.ledger_path, encoding="utf-8") as f:
            for line in f:
                line = line.rstrip("\n")
                if not line:
                    continue
                digest, _, path = line.partition("  ")
                yield digest, Path(path)

    def __enter__(self) -> "ChecksumLedger":
        """Context manager entry."""
        return self.open()

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()
