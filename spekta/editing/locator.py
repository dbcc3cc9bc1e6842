"""
Unique match locator — finds the single region of a file that a search
string refers to, tolerating whitespace drift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AmbiguousMatchError, NotFoundError
from .normalizer import DEFAULT_TAB_WIDTH, normalize, normalize_with_offsets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSpan:
    """Half-open ``[start, end)`` character range into the searched text."""
    start: int
    end: int

    def text(self, source: str) -> str:
        return source[self.start:self.end]


def find_all_positions(haystack: str, needle: str) -> list[int]:
    """Return every start index of *needle* in *haystack*, overlaps included."""
    positions: list[int] = []
    pos = haystack.find(needle)
    while pos != -1:
        positions.append(pos)
        pos = haystack.find(needle, pos + 1)
    return positions


def locate(original: str, search: str,
           tab_width: int = DEFAULT_TAB_WIDTH) -> MatchSpan:
    """Locate the one region of *original* that *search* refers to.

    Both texts are compared in normalized form. The returned span indexes
    the original (non-normalized) text, so the file's own formatting is
    what gets replaced.

    Raises
    ------
    NotFoundError
        If *search* is blank or has no normalized occurrence.
    AmbiguousMatchError
        If *search* has more than one normalized occurrence.
    """
    needle = normalize(search, tab_width)
    if not needle:
        raise NotFoundError("search text is blank")

    haystack = normalize_with_offsets(original, tab_width)
    # A match may not begin partway through an expanded tab
    positions = [p for p in find_all_positions(haystack.text, needle)
                 if haystack.starts_source_char(p)]

    if not positions:
        raise NotFoundError("search text does not occur in the file")
    if len(positions) > 1:
        logger.debug(
            "[Replace] Search matched %d times at normalized offsets %s",
            len(positions), positions[:10],
        )
        raise AmbiguousMatchError(len(positions))

    start, end = haystack.source_span(positions[0], len(needle))

    # Prefer the verbatim occurrence when there is exactly one and it covers
    # the normalized match; it keeps whitespace normalization dropped.
    exact = original.find(search)
    if (exact != -1 and original.find(search, exact + 1) == -1
            and exact <= start and end <= exact + len(search)):
        return MatchSpan(exact, exact + len(search))

    logger.debug(
        "[Replace] Whitespace-tolerant match at %d-%d", start, end,
    )
    return MatchSpan(start, end)
