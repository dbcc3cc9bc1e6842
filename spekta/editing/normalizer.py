"""
Whitespace normalizer — canonical comparison form of text that still knows
where every character came from.

The normalized form is used only to *compare* text; edits are always spliced
into the original content using the offset map.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_TAB_WIDTH = 2


@dataclass
class NormalizedText:
    """Normalized text plus, for each of its characters, the source index."""
    text: str = ""
    offsets: list[int] = field(default_factory=list)

    def source_span(self, pos: int, length: int) -> tuple[int, int]:
        """Map a normalized ``[pos, pos + length)`` range to a source range.

        The source range runs from the origin of the first character to just
        past the origin of the last one.
        """
        if length <= 0:
            raise ValueError("cannot map an empty range")
        return self.offsets[pos], self.offsets[pos + length - 1] + 1

    def starts_source_char(self, pos: int) -> bool:
        """False when *pos* falls inside the expansion of a tab, after its first space."""
        return pos == 0 or self.offsets[pos] != self.offsets[pos - 1]


def normalize_with_offsets(text: str,
                           tab_width: int = DEFAULT_TAB_WIDTH) -> NormalizedText:
    """Normalize *text* for comparison, recording source offsets.

    In one forward pass over the lines of *text*:

    * ``\\r\\n`` becomes ``\\n`` (the ``\\r`` is trailing whitespace),
    * each tab expands to *tab_width* spaces, all mapped to the tab,
    * trailing whitespace is stripped from every line,
    * leading and trailing blank lines are dropped.

    Each emitted newline maps to the ``\\n`` that ended its source line.
    """
    pieces: list[str] = []
    offsets: list[int] = []
    pending_newlines: list[int] = []  # newlines held back until a non-blank line
    spaces = " " * tab_width

    pos = 0
    length = len(text)
    while pos <= length:
        nl = text.find("\n", pos)
        line_end = length if nl == -1 else nl
        stripped = text[pos:line_end].rstrip()

        if stripped:
            if pieces:
                pieces.append("\n" * len(pending_newlines))
                offsets.extend(pending_newlines)
            pending_newlines = []

            if "\t" in stripped:
                for i, ch in enumerate(stripped, start=pos):
                    if ch == "\t":
                        pieces.append(spaces)
                        offsets.extend([i] * tab_width)
                    else:
                        pieces.append(ch)
                        offsets.append(i)
            else:
                pieces.append(stripped)
                offsets.extend(range(pos, pos + len(stripped)))

        if nl == -1:
            break
        if pieces:
            pending_newlines.append(nl)
        pos = nl + 1

    return NormalizedText(text="".join(pieces), offsets=offsets)


def normalize(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Return the comparison form of *text* (see :func:`normalize_with_offsets`)."""
    return normalize_with_offsets(text, tab_width).text
