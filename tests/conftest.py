"""Shared pytest fixtures."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Callable

import pytest

from media_dedup.config.settings import reset_settings
from media_dedup.detector.models import MediaFile, Observation


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Create an empty scan root."""
    path = tmp_path / "media"
    path.mkdir()
    return path


@pytest.fixture
def make_file(root: Path) -> Callable[..., Path]:
    """Create a file under the scan root."""

    def _make(relative: str, content: bytes = b"video") -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def media_file(root: Path) -> Callable[[str], MediaFile]:
    """Build a MediaFile under the scan root without touching disk."""

    def _media_file(relative: str) -> MediaFile:
        return MediaFile.from_path(root / relative, root)

    return _media_file


@pytest.fixture
def observation(media_file: Callable[[str], MediaFile]) -> Callable[[str, str], Observation]:
    """Build a synthetic observation."""

    def _observation(relative: str, digest: str) -> Observation:
        return Observation(file=media_file(relative), digest=digest)

    return _observation


@pytest.fixture
def locked_dirs(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make directories named locked unlistable."""
    original = os.scandir

    def _scandir(path="."):
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", str(path))
        return original(path)

    monkeypatch.setattr(os, "scandir", _scandir)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Isolate tests from the global settings and environment."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "MEDIA_DEDUP_OUTPUT_DIR",
        "MEDIA_DEDUP_CLASSIFICATION_MODE",
        "MEDIA_DEDUP_ON_READ_ERROR",
        "MEDIA_DEDUP_KEEP_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()

    # CLI runs bind log handlers to the runner's temporary stderr
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
