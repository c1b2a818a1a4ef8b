"""Detection and removal of numeric filename suffixes.

Copies made by hand tend to pick up tails like ``-1``, ``_02`` or a bare
``01`` (``clip-1.mp4``, ``clip_02.mp4``, ``clip01.mp4``). These helpers
recognise and strip those tails so duplicates can be renamed back to a
clean name.
"""

import re

from ..common.constants import SHORT_HASH_LENGTH

HYPHEN_SUFFIX = re.compile(r"-\d+\Z")
UNDERSCORE_SUFFIX = re.compile(r"_\d+\Z")
TWO_DIGIT_SUFFIX = re.compile(r"\d{2}\Z")

# Applied in this order, each once, to what the previous rule left
STRIP_RULES = (HYPHEN_SUFFIX, UNDERSCORE_SUFFIX, TWO_DIGIT_SUFFIX)


def split_name(filename: str) -> tuple[str, str]:
    """Split a filename at its last dot.

    Returns:
        Tuple of (base, extension) where extension keeps its dot
    """
    if "." in filename:
        base, ext = filename.rsplit(".", 1)
        return base, "." + ext
    return filename, ""


def has_noise_suffix(filename: str) -> bool:
    """Check whether the filename base ends in a numeric suffix."""
    base, _ = split_name(filename)
    return any(rule.search(base) for rule in STRIP_RULES)


def strip_noise_suffix(filename: str) -> str:
    """Remove numeric suffixes from the filename base.

    Rules run hyphen, underscore, then two-digit, so stacked suffixes such
    as ``movie_02-3.mkv`` collapse to ``movie.mkv`` in one call.
    """
    base, ext = split_name(filename)
    for rule in STRIP_RULES:
        base = rule.sub("", base, count=1)
    return base + ext


def hashed_name(filename: str, digest: str) -> str:
    """Insert a short digest prefix before the extension.

    >>> hashed_name("show.mp4", "a1b2c3d4e5f60718")
    'show_a1b2c3d4.mp4'
    """
    base, ext = split_name(filename)
    return f"{base}_{digest[:SHORT_HASH_LENGTH]}{ext}"
