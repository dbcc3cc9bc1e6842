"""Search/replace patch engine — locate LLM edits and apply them atomically."""

from .block_parser import EditBlock, parse_edit_blocks
from .normalizer import NormalizedText, normalize, normalize_with_offsets
from .locator import MatchSpan, locate
from .line_range import LineRange, parse_range, parse_path_with_range
from .patch_applier import (
    AppliedEdit, ApplyResult, PatchApplier, SourceDocument, apply_blocks,
)
from .write_guard import (
    ReplaceReport, WriteGuard, contains_conflict_markers, fingerprint,
)
from .errors import (
    PatchError, MalformedEditError, BlockError, NotFoundError,
    AmbiguousMatchError, OverlappingEditError, InvalidRangeError,
    ConflictMarkersPresentError, StaleWriteError, EditRejectedError,
)
from .metrics import log_edit_metric, read_edit_stats

__all__ = [
    "EditBlock", "parse_edit_blocks",
    "NormalizedText", "normalize", "normalize_with_offsets",
    "MatchSpan", "locate",
    "LineRange", "parse_range", "parse_path_with_range",
    "AppliedEdit", "ApplyResult", "PatchApplier", "SourceDocument", "apply_blocks",
    "ReplaceReport", "WriteGuard", "contains_conflict_markers", "fingerprint",
    "PatchError", "MalformedEditError", "BlockError", "NotFoundError",
    "AmbiguousMatchError", "OverlappingEditError", "InvalidRangeError",
    "ConflictMarkersPresentError", "StaleWriteError", "EditRejectedError",
    "log_edit_metric", "read_edit_stats",
]
