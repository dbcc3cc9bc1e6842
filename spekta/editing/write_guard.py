"""
Write guard — the on-disk path around the patch applier.

Sequence: access check → read once + fingerprint → conflict-marker check →
parse + apply in memory → optional review → re-read + compare fingerprint →
atomic write. Any failure leaves the file untouched.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ..diff_display import compute_diff
from .block_parser import EditBlock, parse_edit_blocks
from .errors import (
    ConflictMarkersPresentError,
    EditRejectedError,
    PatchError,
    StaleWriteError,
)
from .line_range import LineRange
from .normalizer import DEFAULT_TAB_WIDTH
from .patch_applier import AppliedEdit, PatchApplier, SourceDocument

logger = logging.getLogger(__name__)

_MARKER_PREFIXES = ("<<<<<<< ", ">>>>>>> ")
_MARKER_SEPARATOR = "======="

Validator = Callable[[str], None]
Approver = Callable[[str, str, str], bool]


def contains_conflict_markers(content: str) -> bool:
    """Return True if any line looks like an unresolved merge conflict marker."""
    for line in content.splitlines():
        if line.startswith(_MARKER_PREFIXES) or line.rstrip() == _MARKER_SEPARATOR:
            return True
    return False


def fingerprint(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


@dataclass
class ReplaceReport:
    """Outcome of a successful replace operation."""
    path: str
    content: str
    applied_edits: list[AppliedEdit] = field(default_factory=list)
    diff: str | None = None
    written: bool = False

    @property
    def applied_count(self) -> int:
        return len(self.applied_edits)

    @property
    def message(self) -> str:
        verb = "Replaced" if self.written else "Would replace"
        ranges = ", ".join(
            f"{e.start_line}-{e.end_line}" for e in self.applied_edits
        )
        return (
            f"{verb} {self.applied_count} block(s) in {self.path}\n"
            f"Line ranges: {ranges}"
        )


class WriteGuard:
    """Apply SEARCH/REPLACE blocks to a file on disk, all or nothing."""

    def __init__(
        self,
        validate: Optional[Validator] = None,
        tab_width: int = DEFAULT_TAB_WIDTH,
    ) -> None:
        self._validate = validate
        self._applier = PatchApplier(tab_width=tab_width)

    def replace_in_file(
        self,
        path: str,
        blocks_input: Union[str, list[EditBlock]],
        line_range: Optional[LineRange] = None,
        dry_run: bool = False,
        approve: Optional[Approver] = None,
    ) -> ReplaceReport:
        """Apply *blocks_input* to *path*.

        Parameters
        ----------
        path:
            Target file.
        blocks_input:
            Raw SEARCH/REPLACE text, or already-parsed blocks.
        line_range:
            Optional restriction of where the blocks may match.
        dry_run:
            Compute the result and diff without writing.
        approve:
            Called as ``approve(path, old, new)`` before the write; returning
            False aborts with :class:`EditRejectedError`.

        Returns
        -------
        ReplaceReport
            Applied edits, the unified diff and whether the file was written.
        """
        if self._validate is not None:
            self._validate(path)

        try:
            raw = self._read_bytes(path)
        except OSError as exc:
            raise PatchError(f"Cannot read {path}: {exc}") from exc
        before = fingerprint(raw)
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PatchError(f"{path} is not valid UTF-8 text: {exc}") from exc

        if contains_conflict_markers(content):
            raise ConflictMarkersPresentError(
                f"{path} contains existing Git conflict markers. "
                "Resolve conflicts before applying replacements."
            )

        blocks = (parse_edit_blocks(blocks_input)
                  if isinstance(blocks_input, str) else list(blocks_input))

        result = self._applier.apply(
            SourceDocument.from_text(content), blocks, line_range,
        )
        report = ReplaceReport(
            path=path,
            content=result.content,
            applied_edits=result.applied_edits,
            diff=compute_diff(path, content, result.content),
        )

        if dry_run:
            logger.info("[Replace] Dry run for %s: %d block(s) would apply",
                        path, report.applied_count)
            return report

        if approve is not None and not approve(path, content, result.content):
            logger.info("[Replace] Edit to %s rejected during review", path)
            raise EditRejectedError(f"Edit to {path} was rejected")

        try:
            current = fingerprint(self._read_bytes(path))
        except OSError as exc:
            logger.warning("[Replace] %s could not be re-read: %s", path, exc)
            raise StaleWriteError(
                f"{path} changed on disk after it was read; re-run the edit"
            ) from exc
        if current != before:
            logger.warning("[Replace] %s changed on disk, aborting write", path)
            raise StaleWriteError(
                f"{path} changed on disk after it was read; re-run the edit"
            )

        if result.content != content:
            try:
                self._safe_write(path, result.content)
            except OSError as exc:
                logger.error("[Replace] Write to %s failed: %s", path, exc)
                raise PatchError(f"Cannot write {path}: {exc}") from exc
        report.written = True
        logger.info("[Replace] Applied %d block(s) to %s",
                    report.applied_count, path)
        return report

    @staticmethod
    def _read_bytes(path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    @staticmethod
    def _safe_write(file_path: str, content: str) -> None:
        """Write content atomically via temp file + rename, bytes unchanged."""
        abs_path = os.path.abspath(file_path)
        fd, tmp_path = tempfile.mkstemp(
            dir=os.path.dirname(abs_path), prefix=".spekta_tmp_",
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content.encode("utf-8"))
            shutil.copymode(abs_path, tmp_path)
            os.replace(tmp_path, abs_path)
        except Exception:
            # Clean up temp file on failure
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
