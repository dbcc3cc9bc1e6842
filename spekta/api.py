"""
Programmatic API for spekta — apply LLM edits from Python code.

Example usage::

    from spekta import replace_in_file

    result = replace_in_file(
        "src/app.py",
        llm_response,
        line_range="10,80",
    )
    print(result.message)
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from .config import Config
from .editing.block_parser import EditBlock
from .editing.line_range import LineRange, parse_range
from .editing.metrics import log_edit_metric
from .editing.errors import PatchError
from .editing.write_guard import Approver, ReplaceReport, WriteGuard
from .security import AccessDeniedError, AccessGate

_logger = logging.getLogger(__name__)


def replace_in_file(
    path: str,
    blocks: Union[str, list[EditBlock]],
    *,
    line_range: Union[LineRange, str, None] = None,
    dry_run: bool = False,
    approve: Optional[Approver] = None,
    config: Config | None = None,
    project_root: str | None = None,
) -> ReplaceReport:
    """Apply SEARCH/REPLACE *blocks* to *path* after access-control checks.

    Args:
        path: File to edit, relative to the project root (default: CWD).
        blocks: Raw SEARCH/REPLACE text or parsed :class:`EditBlock` objects.
        line_range: ``LineRange`` or ``"start,end"`` string limiting the match.
        dry_run: Compute and diff without writing.
        approve: Optional review callback ``(path, old, new) -> bool``.
        config: Settings (default: loaded from ``.spekta.yaml`` and env).
        project_root: Root used for the access-control checks.

    Raises:
        AccessDeniedError: The gate refused the path.
        PatchError: Any parse, match, conflict-marker or stale-write failure.
    """
    cfg = config or Config.load()
    if isinstance(line_range, str):
        line_range = parse_range(line_range)
    _logger.debug("[Replace] Request for %s (range=%s, dry_run=%s)",
                  path, line_range, dry_run)

    gate = AccessGate(cfg, project_root=project_root)
    guard = WriteGuard(validate=gate.validate, tab_width=cfg.TAB_WIDTH)

    target = path if project_root is None else os.path.join(gate.project_root, path)

    metric: dict = {"file": path, "dry_run": dry_run}
    if isinstance(blocks, list):
        metric["blocks"] = len(blocks)
    try:
        report = guard.replace_in_file(
            target, blocks, line_range=line_range, dry_run=dry_run, approve=approve,
        )
    except (PatchError, AccessDeniedError) as exc:
        metric["error_kind"] = type(exc).__name__
        _record(cfg, gate.project_root, metric)
        raise

    metric["blocks"] = report.applied_count
    metric["applied"] = report.applied_count
    _record(cfg, gate.project_root, metric)
    return report


def _record(cfg: Config, project_root: str, metric: dict) -> None:
    if cfg.METRICS_ENABLED:
        log_edit_metric(metric, project_root=project_root,
                        metrics_dir=cfg.METRICS_DIR)
