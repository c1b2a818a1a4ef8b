"""Tests for rename planning."""

import pytest

from media_dedup.actions.rename_planner import RenamePlanner
from media_dedup.common.exceptions import AmbiguousRenameError
from media_dedup.detector.classifier import classify
from media_dedup.detector.models import ClassificationMode, ConflictReason

DIGEST_A = "a1b2c3d4e5f60718"
DIGEST_B = "0f1e2d3c4b5a6978"


def test_conflicting_clean_names_get_one_hashed(observation) -> None:
    """Test two duplicates stripping to the same name are disambiguated."""
    report = classify([
        observation("show-01.mp4", DIGEST_A),
        observation("show-02.mp4", DIGEST_A),
    ])

    plan = RenamePlanner().plan(report)

    assert [e.file.name for e in plan] == ["show-01.mp4", "show-02.mp4"]
    assert plan[0].target_name == "show.mp4"
    assert not plan[0].conflict
    assert plan[1].target_name == "show_a1b2c3d4.mp4"
    assert plan[1].conflict_reason is ConflictReason.PLANNED_NAME
    assert plan[1].target_name[5:13] == plan[1].digest[:8]


def test_existing_file_forces_hashed_name(observation, make_file) -> None:
    """Test a name taken on disk is not reused."""
    make_file("show.mp4")
    report = classify([
        observation("show-01.mp4", DIGEST_A),
        observation("show-1.mp4", DIGEST_A),
        observation("clip-01.mp4", DIGEST_B),
        observation("clip-02.mp4", DIGEST_B),
    ])

    plan = {e.file.name: e for e in RenamePlanner().plan(report)}

    assert plan["show-01.mp4"].conflict_reason is ConflictReason.EXISTING_FILE
    assert plan["show-01.mp4"].target_name == "show_a1b2c3d4.mp4"
    assert plan["clip-01.mp4"].target_name == "clip.mp4"
    assert plan["clip-02.mp4"].target_name == "clip_0f1e2d3c.mp4"


def test_second_collision_is_flagged(observation) -> None:
    """Test a hashed name that is already planned marks the entry ambiguous."""
    report = classify([
        observation("show-01.mp4", DIGEST_A),
        observation("show-02.mp4", DIGEST_A),
        observation("show-03.mp4", DIGEST_A),
    ])

    plan = RenamePlanner().plan(report)

    assert [e.ambiguous for e in plan] == [False, False, True]
    assert plan[2].target_name == plan[1].target_name


def test_second_collision_raises_in_strict_mode(observation) -> None:
    """Test strict planning refuses ambiguous renames."""
    report = classify([
        observation("show-01.mp4", DIGEST_A),
        observation("show-02.mp4", DIGEST_A),
        observation("show-03.mp4", DIGEST_A),
    ])

    with pytest.raises(AmbiguousRenameError, match="show_a1b2c3d4.mp4"):
        RenamePlanner(strict=True).plan(report)


def test_different_checksums_get_their_own_hash(observation) -> None:
    """Test the inserted hash comes from each file's own checksum."""
    report = classify([
        observation("show-01.mp4", DIGEST_A),
        observation("show-02.mp4", DIGEST_A),
        observation("show-03.mp4", DIGEST_B),
        observation("show-04.mp4", DIGEST_B),
    ])

    targets = [e.target_name for e in RenamePlanner().plan(report)]

    assert targets[:3] == ["show.mp4", "show_a1b2c3d4.mp4", "show_0f1e2d3c.mp4"]


def test_only_same_directory_duplicates_are_candidates(observation) -> None:
    """Test unique and cross-directory files are not renamed."""
    report = classify([
        observation("one/solo-1.mp4", DIGEST_A),
        observation("one/pair-1.mp4", DIGEST_B),
        observation("two/pair-2.mp4", DIGEST_B),
    ])

    planner = RenamePlanner()

    assert planner.candidates(report) == {}
    assert planner.plan(report) == []


def test_unsuffixed_duplicates_are_not_candidates(observation) -> None:
    """Test duplicates without a numeric suffix keep their name."""
    report = classify([
        observation("clip.mp4", DIGEST_A),
        observation("clip-1.mp4", DIGEST_A),
    ])

    plan = RenamePlanner().plan(report)

    assert [e.file.name for e in plan] == ["clip-1.mp4"]
    assert plan[0].conflict_reason is None


def test_candidates_follow_classification_mode(observation) -> None:
    """Test first-seen mode drops directories whose copies were classified cross."""
    observations = [
        observation("two/clip-1.mp4", DIGEST_A),
        observation("one/clip-1.mp4", DIGEST_A),
        observation("one/clip-2.mp4", DIGEST_A),
    ]

    first_seen = classify(observations, ClassificationMode.FIRST_SEEN)
    directory_set = classify(observations, ClassificationMode.DIRECTORY_SET)

    assert RenamePlanner().candidates(first_seen) == {}
    assert list(RenamePlanner().candidates(directory_set)) == ["one"]


def test_numeric_only_names_are_skipped(observation) -> None:
    """Test names that would strip to nothing are not renamed."""
    report = classify([
        observation("01.mp4", DIGEST_A),
        observation("02.mp4", DIGEST_A),
    ])

    assert RenamePlanner().plan(report) == []


def test_custom_exists_check(observation) -> None:
    """Test the filesystem existence check can be replaced."""
    report = classify([
        observation("clip-1.mp4", DIGEST_A),
        observation("clip-2.mp4", DIGEST_A),
    ])

    planner = RenamePlanner(exists=lambda path: path.name == "clip.mp4")
    plan = planner.plan(report)

    assert plan[0].conflict_reason is ConflictReason.EXISTING_FILE
    assert plan[0].target_name == "clip_a1b2c3d4.mp4"
    assert plan[1].ambiguous
