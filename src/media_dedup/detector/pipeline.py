"""Two-pass duplicate detection pipeline."""

import time
from collections.abc import Iterable
from contextlib import nullcontext
from pathlib import Path
from typing import Callable, Optional

from ..actions.rename_planner import RenamePlanner
from ..actions.strategies import CleanNameStrategy, KeeperStrategy
from ..common.constants import ROOT_DISPLAY_NAME, VIDEO_FORMATS
from ..common.exceptions import FileAccessError
from ..common.logging import get_logger
from ..scanner.discovery import MediaDiscovery
from ..scanner.ledger import ChecksumLedger
from .analysis import find_cross_directory_duplicates, find_within_directory_duplicates
from .classifier import ClassificationEngine
from .fingerprint import Fingerprinter
from .models import (
    AnalysisResult,
    ClassificationMode,
    MediaFile,
    ReadErrorPolicy,
    ScanStats,
)

logger = get_logger(__name__)


class DetectionPipeline:
    """Orchestrates discovery, fingerprinting, classification and planning."""

    def __init__(
        self,
        root: Path,
        extensions: Iterable[str] = VIDEO_FORMATS,
        mode: ClassificationMode = ClassificationMode.DIRECTORY_SET,
        on_read_error: ReadErrorPolicy = ReadErrorPolicy.ABORT,
        hash_workers: int = 1,
        strategy: Optional[KeeperStrategy] = None,
        strict_renames: bool = False,
        ledger: Optional[ChecksumLedger] = None,
    ) -> None:
        """Initialize detection pipeline.

        Args:
            root: Directory tree to analyze
            extensions: Media extensions to include
            mode: Duplicate classification mode
            on_read_error: Abort the run or skip unreadable files
            hash_workers: Threads used to fingerprint a directory
            strategy: Keeper strategy for same-directory duplicates
            strict_renames: Fail on ambiguous renames instead of flagging them
            ledger: Optional checksum ledger to record fingerprints in
        """
        self.root = root.resolve()
        self.discovery = MediaDiscovery(self.root, extensions)
        self.mode = ClassificationMode(mode)
        self.on_read_error = ReadErrorPolicy(on_read_error)
        self.fingerprinter = Fingerprinter(hash_workers)
        self.strategy = strategy or CleanNameStrategy()
        self.planner = RenamePlanner(strict=strict_renames)
        self.ledger = ledger

    def run(self, on_file: Optional[Callable[[MediaFile], None]] = None) -> AnalysisResult:
        """Run the detection pipeline.

        Args:
            on_file: Called after each file is fingerprinted and classified

        Returns:
            Analysis result with duplicate sets, review groups and renames

        Raises:
            FileAccessError: On an unreadable file when the policy is abort
            LedgerError: If the ledger cannot be written
        """
        start = time.perf_counter()
        logger.info(f"Starting duplicate detection in {self.root}")

        # Pass 1: fingerprint and classify
        engine = ClassificationEngine(self.mode)
        directories = self.discovery.find_media_dirs(
            on_error=lambda e: self._handle_read_error(e, engine)
        )

        if self.ledger:
            self.ledger.reset()

        with self.ledger or nullcontext():
            for directory in directories:
                self._process_directory(directory, engine, on_file)

        report = engine.report()
        logger.info(
            f"Pass 1 complete: {report.total_files} files, {report.unique_files} unique"
        )

        # Pass 2: analyze
        duplicate_sets = find_within_directory_duplicates(report, self.strategy)
        cross_groups = find_cross_directory_duplicates(report)
        rename_plan = self.planner.plan(report)

        stats = ScanStats(
            bytes_processed=self.fingerprinter.bytes_processed,
            hashing_seconds=self.fingerprinter.hashing_seconds,
            elapsed_seconds=time.perf_counter() - start,
        )

        logger.info("Detection complete")
        return AnalysisResult(
            root=self.root,
            report=report,
            duplicate_sets=duplicate_sets,
            cross_directory_groups=cross_groups,
            rename_plan=rename_plan,
            directories=directories,
            stats=stats,
        )

    def _process_directory(
        self,
        directory: Path,
        engine: ClassificationEngine,
        on_file: Optional[Callable[[MediaFile], None]],
    ) -> None:
        try:
            paths = self.discovery.list_media_files(directory)
        except FileAccessError as e:
            self._handle_read_error(e, engine)
            return

        logger.info(f"Examining {self._display_name(directory)}: {len(paths)} media files")

        for path, result in self.fingerprinter.fingerprint_many(paths):
            if isinstance(result, FileAccessError):
                self._handle_read_error(result, engine)
                continue

            digest, size = result
            logger.debug(f"Checksum {digest[:8]}: {path.name}")

            if self.ledger:
                self.ledger.append(digest, path)

            file = MediaFile.from_path(path, self.root)
            engine.observe(file, digest, size)
            if on_file:
                on_file(file)

    def _handle_read_error(self, error: FileAccessError, engine: ClassificationEngine) -> None:
        if self.on_read_error is ReadErrorPolicy.ABORT:
            raise error
        logger.warning(f"Skipping unreadable {error.path}: {error.reason}")
        engine.skip(error.path, error.reason)

    def _display_name(self, directory: Path) -> str:
        if directory == self.root:
            return ROOT_DISPLAY_NAME
        return directory.relative_to(self.root).as_posix()
