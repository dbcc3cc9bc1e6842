"""
Edit metrics — tracks search/replace outcomes in a JSONL log file.
"""

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_METRICS_DIR = ".spekta/metrics"
_METRICS_FILE = "edit_metrics.jsonl"


def _metrics_path(project_root: str | None = None,
                  metrics_dir: str = _METRICS_DIR) -> str:
    """Return the absolute path to the metrics file."""
    base = project_root or os.getcwd()
    return os.path.join(base, metrics_dir, _METRICS_FILE)


def log_edit_metric(data: dict, project_root: str | None = None,
                    metrics_dir: str = _METRICS_DIR) -> None:
    """Append a single edit metric entry to the JSONL log.

    Parameters
    ----------
    data:
        Metric fields to log (file, blocks, applied, error_kind, etc.).
    project_root:
        Optional project root directory. Defaults to CWD.
    metrics_dir:
        Directory, relative to *project_root*, holding the log.
    """
    path = _metrics_path(project_root, metrics_dir)

    entry = {"timestamp": datetime.now(timezone.utc).isoformat()}
    entry.update(data)

    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")
    except OSError as exc:
        logger.warning("[Replace] Failed to write metrics: %s", exc)


def read_edit_stats(
    last_n: int = 50,
    project_root: str | None = None,
    metrics_dir: str = _METRICS_DIR,
) -> dict:
    """Compute rolling statistics from the metrics log.

    Parameters
    ----------
    last_n:
        Number of most-recent entries to include.
    project_root:
        Optional project root directory.

    Returns
    -------
    dict
        Statistics including total_edits, success_rate, avg_blocks and
        error_kinds (percentage of entries per failure kind).
    """
    path = _metrics_path(project_root, metrics_dir)

    entries: list[dict] = []
    if os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    try:
                        entries.append(json.loads(line))
                    except json.JSONDecodeError:
                        continue

    entries = entries[-last_n:] if last_n > 0 else []

    if not entries:
        return {
            "total_edits": 0,
            "success_rate": 0.0,
            "avg_blocks": 0.0,
            "error_kinds": {},
        }

    total = len(entries)
    successes = sum(1 for e in entries if not e.get("error_kind"))
    block_counts = [e["blocks"] for e in entries if "blocks" in e]
    kinds = Counter(e["error_kind"] for e in entries if e.get("error_kind"))

    return {
        "total_edits": total,
        "success_rate": successes / total * 100,
        "avg_blocks": (
            sum(block_counts) / len(block_counts) if block_counts else 0.0
        ),
        "error_kinds": {
            kind: count / total * 100 for kind, count in kinds.most_common()
        },
    }
