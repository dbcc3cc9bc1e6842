"""
Patch errors — every way a search/replace edit can fail.

Block-level errors (malformed, not found, ambiguous) remember which block
failed so the caller can print a targeted message instead of a traceback.
"""

from __future__ import annotations


class PatchError(Exception):
    """Base class for all patch engine failures."""


class MalformedEditError(PatchError):
    """The edit input is structurally invalid (missing sentinels, no blocks)."""


class BlockError(PatchError):
    """A single edit block could not be applied."""

    kind = "failed"

    def __init__(self, detail: str, block_index: int | None = None,
                 block_count: int | None = None) -> None:
        self.detail = detail
        self.block_index = block_index
        self.block_count = block_count
        super().__init__(self._format())

    def set_position(self, block_index: int, block_count: int) -> None:
        """Tag the error with the 1-based position of the failing block."""
        self.block_index = block_index
        self.block_count = block_count
        self.args = (self._format(),)

    def _format(self) -> str:
        if self.block_index is None:
            return f"{self.kind}, {self.detail}"
        return (
            f"block {self.block_index} of {self.block_count}: "
            f"{self.kind}, {self.detail}"
        )


class NotFoundError(BlockError):
    """The search text does not occur in the file, even after normalization."""

    kind = "not found"


class AmbiguousMatchError(BlockError):
    """The search text occurs more than once."""

    kind = "ambiguous"

    def __init__(self, occurrences: int, block_index: int | None = None,
                 block_count: int | None = None) -> None:
        self.occurrences = occurrences
        super().__init__(
            f"found {occurrences} occurrences; narrow the search",
            block_index, block_count,
        )


class OverlappingEditError(AmbiguousMatchError):
    """The search text overlaps a region rewritten by an earlier block."""

    kind = "conflicting edit"

    def __init__(self, block_index: int | None = None,
                 block_count: int | None = None) -> None:
        self.occurrences = 1
        BlockError.__init__(
            self,
            "search overlaps text replaced by an earlier block",
            block_index, block_count,
        )


class InvalidRangeError(PatchError):
    """The requested line range does not fit the file."""


class ConflictMarkersPresentError(PatchError):
    """The file still contains unresolved version-control conflict markers."""


class StaleWriteError(PatchError):
    """The file changed on disk between the read and the write."""


class EditRejectedError(PatchError):
    """The user declined the change during review."""
