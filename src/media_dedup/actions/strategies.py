"""Keeper strategies for choosing which same-directory duplicate survives."""

from ..common.logging import get_logger
from ..detector.models import MediaFile
from .suffixes import has_noise_suffix

logger = get_logger(__name__)


class KeeperStrategy:
    """Base class for keeper strategies."""

    def select_keeper(self, files: list[MediaFile]) -> MediaFile:
        """Select the file to keep from a duplicate set.

        Args:
            files: Duplicate set in first-observed order

        Returns:
            The file to keep
        """
        raise NotImplementedError

    def select_files_to_remove(self, files: list[MediaFile]) -> list[MediaFile]:
        """Select which files to back up and remove.

        Args:
            files: Duplicate set in first-observed order

        Returns:
            Every file except the keeper
        """
        keeper = self.select_keeper(files)
        return [f for f in files if f.path != keeper.path]


class CleanNameStrategy(KeeperStrategy):
    """Keep the first file without a numeric suffix.

    When every copy carries a suffix, keep the longest filename (first one
    wins a tie).
    """

    def select_keeper(self, files: list[MediaFile]) -> MediaFile:
        """Keep first clean name, else longest name."""
        if not files:
            raise ValueError("Cannot select a keeper from an empty duplicate set")

        longest = files[0]
        for file in files:
            if not has_noise_suffix(file.name):
                return file
            if len(file.name) > len(longest.name):
                longest = file

        logger.debug(f"No clean name among {len(files)} copies, keeping {longest.name}")
        return longest


class FirstSeenStrategy(KeeperStrategy):
    """Keep the first observed file."""

    def select_keeper(self, files: list[MediaFile]) -> MediaFile:
        """Keep first, remove rest."""
        if not files:
            raise ValueError("Cannot select a keeper from an empty duplicate set")
        return files[0]


def get_strategy(strategy_name: str) -> KeeperStrategy:
    """Get keeper strategy by name.

    Args:
        strategy_name: Strategy name (clean-name, first-seen)

    Returns:
        KeeperStrategy instance

    Raises:
        ValueError: If strategy name is invalid
    """
    strategies = {
        "clean-name": CleanNameStrategy,
        "first-seen": FirstSeenStrategy,
    }

    strategy_class = strategies.get(strategy_name.lower())
    if not strategy_class:
        raise ValueError(
            f"Invalid strategy '{strategy_name}'. "
            f"Valid options: {', '.join(strategies.keys())}"
        )

    return strategy_class()
