"""Tests for CSV and JSON export."""

import csv
import json
from pathlib import Path

import pytest

from media_dedup.detector.models import AnalysisResult
from media_dedup.detector.pipeline import DetectionPipeline
from media_dedup.reporting.exporter import ReportExporter


@pytest.fixture
def result(make_file, root: Path) -> AnalysisResult:
    """Analysis of a tree with one same-directory and one cross-directory pair."""
    make_file("clip.mp4", b"AAAA")
    make_file("clip-1.mp4", b"AAAA")
    make_file("a/movie.mkv", b"BBBB")
    make_file("b/movie.mkv", b"BBBB")
    return DetectionPipeline(root).run()


def test_export_json(result: AnalysisResult, tmp_path: Path) -> None:
    """Test JSON export includes summary, sets, groups and renames."""
    output = tmp_path / "reports" / "dupes.json"

    ReportExporter().export_json(result, output)
    data = json.loads(output.read_text())

    assert data["classification_mode"] == "directory-set"
    assert data["summary"]["total_files"] == 4
    assert data["summary"]["unique_files"] == 2
    assert data["within_directory"][0]["keep"]["name"] == "clip.mp4"
    assert [f["name"] for f in data["within_directory"][0]["remove"]] == ["clip-1.mp4"]
    assert data["cross_directory"][0]["first_encountered"]["directory"] == "a"
    assert data["renames"][0]["conflict_reason"] == "existing-file"
    assert data["skipped"] == []


def test_export_csv(result: AnalysisResult, tmp_path: Path) -> None:
    """Test CSV export writes one row per planned action."""
    output = tmp_path / "dupes.csv"

    ReportExporter().export_csv(result, output)
    with open(output, newline="") as f:
        rows = list(csv.DictReader(f))

    assert [row["action"] for row in rows] == ["keep", "remove", "review", "rename"]
    assert rows[2]["directory"] == "b"
    assert rows[3]["target"].endswith(".mp4")
