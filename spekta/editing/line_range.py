"""
Line ranges — ``file.py[10,50]`` style restrictions on where edits may land.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidRangeError

_PATH_WITH_RANGE = re.compile(r"^(.*)\[(\d+|\$)?(?:,(\d+|\$))?\]$")


@dataclass(frozen=True)
class LineRange:
    """Inclusive, 1-indexed line range. ``end=None`` means end of file."""
    start: int = 1
    end: Optional[int] = None

    def offsets(self, content: str) -> tuple[int, int]:
        """Return the ``[start, end)`` character range these lines cover.

        The range excludes the newline that terminates the last line.
        """
        total = content.count("\n")
        if not content.endswith("\n"):
            total += 1
        if self.start < 1 or self.start > total:
            raise InvalidRangeError(
                f"Invalid range: start line {self.start} is out of bounds "
                f"(1-{total})"
            )
        end = total if self.end is None else min(self.end, total)
        if end < self.start:
            raise InvalidRangeError(
                f"Invalid range: end line {end} is before start line "
                f"{self.start}"
            )

        start_off = _line_start(content, self.start)
        end_off = content.find("\n", _line_start(content, end))
        if end_off == -1:
            end_off = len(content)
        elif end_off > 0 and content[end_off - 1] == "\r":
            end_off -= 1
        return start_off, end_off


def _line_start(content: str, line: int) -> int:
    pos = 0
    for _ in range(line - 1):
        pos = content.index("\n", pos) + 1
    return pos


def parse_range(text: str | None) -> LineRange:
    """Parse ``"start,end"`` (``end`` may be ``$``) into a :class:`LineRange`."""
    if not text or text == "1,$":
        return LineRange()
    match = re.match(r"^(\d+),(\d+|\$)$", text)
    if not match:
        raise InvalidRangeError(
            "Invalid range format. Use 'start,end' (e.g., 10,20 or 50,$)."
        )
    end = None if match.group(2) == "$" else int(match.group(2))
    return LineRange(start=int(match.group(1)), end=end)


def parse_path_with_range(arg: str) -> tuple[str, LineRange | None]:
    """Split ``"src/app.py[10,50]"`` into the path and its line range.

    ``[10]`` and ``[10,$]`` run to end of file; ``[,20]`` starts at line 1.
    A path without brackets has no range.
    """
    match = _PATH_WITH_RANGE.match(arg)
    if not match:
        return arg, None

    start_raw, end_raw = match.group(2), match.group(3)
    start = 1 if start_raw in (None, "", "$") else int(start_raw)
    end = None if end_raw in (None, "", "$") else int(end_raw)
    return match.group(1), LineRange(start=start, end=end)
