"""Second-pass analyses over a classification report."""

from typing import Optional

from ..actions.strategies import CleanNameStrategy, KeeperStrategy
from ..common.logging import get_logger
from .models import ClassificationReport, CrossDirectoryGroup, DuplicateSet

logger = get_logger(__name__)


def find_within_directory_duplicates(
    report: ClassificationReport,
    strategy: Optional[KeeperStrategy] = None,
) -> list[DuplicateSet]:
    """Build the duplicate sets that can be cleaned up automatically.

    Args:
        report: Classification report
        strategy: Keeper strategy (defaults to CleanNameStrategy)

    Returns:
        One DuplicateSet per directory and digest with two or more copies
    """
    strategy = strategy or CleanNameStrategy()
    duplicate_sets = []

    for directory, digests in report.directory_duplicates.items():
        for digest in digests:
            files = report.group(digest).files_in(directory)
            if len(files) < 2:
                continue
            duplicate_sets.append(
                DuplicateSet(
                    directory=directory,
                    digest=digest,
                    files=files,
                    keeper=strategy.select_keeper(files),
                )
            )

    removals = sum(len(s.removals) for s in duplicate_sets)
    logger.info(
        f"Within-directory: {len(duplicate_sets)} duplicate sets, {removals} removable copies"
    )
    return duplicate_sets


def find_cross_directory_duplicates(report: ClassificationReport) -> list[CrossDirectoryGroup]:
    """Build the cross-directory groups that need manual review.

    Args:
        report: Classification report

    Returns:
        One group per cross-directory digest, anchored on its representative
    """
    groups = []
    for digest in report.cross_directory:
        group = report.group(digest)
        groups.append(
            CrossDirectoryGroup(
                digest=digest,
                representative=group.representative,
                others=group.files[1:],
            )
        )

    logger.info(f"Cross-directory: {len(groups)} duplicate groups for review")
    return groups
