"""Tests for the classification engine."""

import pytest

from media_dedup.common.exceptions import DetectionError
from media_dedup.detector.classifier import ClassificationEngine, classify
from media_dedup.detector.models import ClassificationMode

DIGEST_A = "a1b2c3d4e5f60718"
DIGEST_B = "0f1e2d3c4b5a6978"
DIGEST_C = "deadbeefcafef00d"


@pytest.fixture
def mixed_observations(observation):
    """Observations with unique, same-directory and cross-directory files."""
    return [
        observation("movie.mp4", DIGEST_A),
        observation("movie-1.mp4", DIGEST_A),
        observation("other.mkv", DIGEST_B),
        observation("sub/movie_02.mp4", DIGEST_A),
        observation("sub/solo.avi", DIGEST_C),
    ]


@pytest.mark.parametrize("mode", list(ClassificationMode))
def test_group_totals(mixed_observations, mode) -> None:
    """Test group sizes add up to the number of files observed."""
    report = classify(mixed_observations, mode)

    assert report.total_files == 5
    assert sum(g.count for g in report.groups.values()) == report.total_files
    assert len(report.groups) == report.unique_files == 3
    assert report.same_dir_dupes + report.cross_dir_dupes == 2


def test_groups_keep_observed_order(mixed_observations) -> None:
    """Test members are listed in first-observed order."""
    report = classify(mixed_observations)

    group = report.group(DIGEST_A)
    assert [f.name for f in group.files] == ["movie.mp4", "movie-1.mp4", "movie_02.mp4"]
    assert report.representative(DIGEST_A).name == "movie.mp4"
    assert group.directories() == ["", "sub"]


def test_first_seen_classification(observation) -> None:
    """Test later files are compared to the representative's directory."""
    report = classify(
        [
            observation("dir1/A.mp4", DIGEST_A),
            observation("dir1/B.mp4", DIGEST_A),
            observation("dir2/C.mp4", DIGEST_A),
        ],
        ClassificationMode.FIRST_SEEN,
    )

    assert report.same_dir_dupes == 1
    assert report.cross_dir_dupes == 1
    assert report.directory_duplicates == {"dir1": [DIGEST_A]}
    assert report.cross_directory == [DIGEST_A]


def test_first_seen_depends_on_order(observation) -> None:
    """Test observing the other directory first changes how B is counted."""
    report = classify(
        [
            observation("dir2/C.mp4", DIGEST_A),
            observation("dir1/A.mp4", DIGEST_A),
            observation("dir1/B.mp4", DIGEST_A),
        ],
        ClassificationMode.FIRST_SEEN,
    )

    assert report.same_dir_dupes == 0
    assert report.cross_dir_dupes == 2
    assert report.directory_duplicates == {}


def test_first_seen_compares_to_representative_only(observation) -> None:
    """Test an interleaved copy elsewhere does not change how B is counted."""
    report = classify(
        [
            observation("dir1/A.mp4", DIGEST_A),
            observation("dir2/C.mp4", DIGEST_A),
            observation("dir1/B.mp4", DIGEST_A),
        ],
        ClassificationMode.FIRST_SEEN,
    )

    # B still matches the representative's directory
    assert report.same_dir_dupes == 1
    assert report.cross_dir_dupes == 1


def test_directory_set_is_order_independent(observation) -> None:
    """Test directory-set mode gives the same answer for any order."""
    forward = [
        observation("dir1/A.mp4", DIGEST_A),
        observation("dir1/B.mp4", DIGEST_A),
        observation("dir2/C.mp4", DIGEST_A),
    ]

    for observations in (forward, list(reversed(forward))):
        report = classify(observations, ClassificationMode.DIRECTORY_SET)

        assert report.same_dir_dupes == 1
        assert report.cross_dir_dupes == 1
        assert report.directory_duplicates == {"dir1": [DIGEST_A]}
        assert report.cross_directory == [DIGEST_A]


def test_directory_set_indexes_every_directory(observation) -> None:
    """Test each directory with two copies gets its own entry."""
    report = classify([
        observation("dir1/a.mp4", DIGEST_A),
        observation("dir1/b.mp4", DIGEST_A),
        observation("dir2/c.mp4", DIGEST_A),
        observation("dir2/d.mp4", DIGEST_A),
        observation("dir3/e.mp4", DIGEST_B),
        observation("dir3/f.mp4", DIGEST_B),
    ])

    assert report.directory_duplicates == {"dir1": [DIGEST_A], "dir2": [DIGEST_A], "dir3": [DIGEST_B]}
    assert report.cross_directory == [DIGEST_A]
    assert report.same_dir_dupes == 3
    assert report.cross_dir_dupes == 1
    assert report.is_directory_duplicate(DIGEST_A, "dir2")
    assert not report.is_directory_duplicate(DIGEST_B, "dir1")


def test_counts_suffixed_files(mixed_observations) -> None:
    """Test every observed suffixed name is counted."""
    report = classify(mixed_observations)

    assert report.suffixed_files == 2


def test_same_path_twice_rejected(media_file) -> None:
    """Test a path may only be observed once."""
    engine = ClassificationEngine()
    engine.observe(media_file("a.mp4"), DIGEST_A)

    with pytest.raises(DetectionError):
        engine.observe(media_file("a.mp4"), DIGEST_A)


def test_skipped_files_are_not_counted(root, media_file) -> None:
    """Test skipped files are reported but excluded from totals."""
    engine = ClassificationEngine()
    engine.observe(media_file("a.mp4"), DIGEST_A)
    engine.skip(root / "broken.mp4", "Permission denied")

    report = engine.report()

    assert report.total_files == 1
    assert [s.path.name for s in report.skipped] == ["broken.mp4"]


def test_report_is_a_snapshot(media_file) -> None:
    """Test later observations do not change an earlier report."""
    engine = ClassificationEngine()
    engine.observe(media_file("a.mp4"), DIGEST_A)
    report = engine.report()

    engine.observe(media_file("b.mp4"), DIGEST_A)

    assert report.group(DIGEST_A).count == 1
    assert engine.report().group(DIGEST_A).count == 2
