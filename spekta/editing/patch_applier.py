"""
Patch applier — applies SEARCH/REPLACE blocks to one in-memory copy of a
file. Either every block lands or the caller gets an error and no content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .block_parser import EditBlock
from .errors import BlockError, OverlappingEditError
from .line_range import LineRange
from .locator import locate
from .normalizer import DEFAULT_TAB_WIDTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """Immutable snapshot of a file's text and its line-ending style."""
    content: str
    line_ending: str = "\n"

    @classmethod
    def from_text(cls, content: str) -> "SourceDocument":
        return cls(content=content, line_ending=detect_line_ending(content))


@dataclass
class AppliedEdit:
    """Where a block landed, in line numbers of the original file."""
    start_line: int
    end_line: int
    original_text: str
    replacement_text: str


@dataclass
class ApplyResult:
    """Fully edited content plus one :class:`AppliedEdit` per block."""
    content: str
    applied_edits: list[AppliedEdit] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return len(self.applied_edits)

    def line_ranges(self) -> str:
        """``"1-3, 10-12"`` summary of the edited regions."""
        return ", ".join(
            f"{e.start_line}-{e.end_line}" for e in self.applied_edits
        )


def detect_line_ending(content: str) -> str:
    """Return ``"\\r\\n"`` if the content uses CRLF anywhere, else ``"\\n"``."""
    return "\r\n" if "\r\n" in content else "\n"


def convert_line_endings(text: str, line_ending: str) -> str:
    """Rewrite every line break in *text* as *line_ending*."""
    text = text.replace("\r\n", "\n")
    if line_ending != "\n":
        text = text.replace("\n", line_ending)
    return text


def line_number_at(content: str, offset: int) -> int:
    """1-indexed line containing *offset*."""
    return content.count("\n", 0, offset) + 1


@dataclass(frozen=True)
class _Splice:
    """One replacement made in the working copy."""
    start: int
    old_len: int
    new_len: int


class PatchApplier:
    """Apply edit blocks to a :class:`SourceDocument`, all or nothing."""

    def __init__(self, tab_width: int = DEFAULT_TAB_WIDTH) -> None:
        self._tab_width = tab_width

    def apply(
        self,
        document: SourceDocument,
        blocks: list[EditBlock],
        line_range: Optional[LineRange] = None,
    ) -> ApplyResult:
        """Apply *blocks* in order and return the edited content.

        Each block is located in the current working copy, so later blocks
        see the effect of earlier ones. Line numbers in the returned edits
        always refer to the original document.

        Raises
        ------
        BlockError
            On the first block that is not found, ambiguous or overlaps an
            earlier edit; ``block_index`` says which one. Nothing built so
            far is returned.
        InvalidRangeError
            If *line_range* does not fit the document.
        """
        original = document.content
        if line_range is not None:
            region_start, region_end = line_range.offsets(original)
        else:
            region_start, region_end = 0, len(original)

        working = original
        splices: list[_Splice] = []
        edits: list[AppliedEdit] = []
        total = len(blocks)

        for index, block in enumerate(blocks, start=1):
            try:
                span = locate(
                    working[region_start:region_end], block.search,
                    self._tab_width,
                )
                w_start = region_start + span.start
                w_end = region_start + span.end
                o_start, o_end = self._to_original(splices, w_start, w_end)
            except BlockError as exc:
                exc.set_position(index, total)
                logger.warning("[Replace] %s", exc)
                raise

            replacement = convert_line_endings(block.replace, document.line_ending)
            edits.append(AppliedEdit(
                start_line=line_number_at(original, o_start),
                end_line=line_number_at(original, max(o_start, o_end - 1)),
                original_text=original[o_start:o_end],
                replacement_text=replacement,
            ))

            working = working[:w_start] + replacement + working[w_end:]
            splices.append(_Splice(w_start, w_end - w_start, len(replacement)))
            region_end += len(replacement) - (w_end - w_start)

            logger.debug(
                "[Replace] Block %d/%d applied at lines %d-%d",
                index, total, edits[-1].start_line, edits[-1].end_line,
            )

        return ApplyResult(content=working, applied_edits=edits)

    @staticmethod
    def _to_original(splices: list[_Splice], start: int,
                     end: int) -> tuple[int, int]:
        """Map a working-copy span back to offsets in the original text.

        Raises OverlappingEditError if the span touches text written by an
        earlier splice (or straddles a deletion).
        """
        for splice in reversed(splices):
            inserted_end = splice.start + splice.new_len
            if splice.new_len:
                overlaps = start < inserted_end and end > splice.start
            else:
                overlaps = start < splice.start < end
            if overlaps:
                raise OverlappingEditError()

            shift = splice.old_len - splice.new_len
            if start >= splice.start:
                start += shift
            if end > splice.start:
                end += shift
        return start, end


def apply_blocks(
    document: SourceDocument,
    blocks: list[EditBlock],
    line_range: Optional[LineRange] = None,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> ApplyResult:
    """Convenience wrapper around :meth:`PatchApplier.apply`."""
    return PatchApplier(tab_width=tab_width).apply(document, blocks, line_range)
