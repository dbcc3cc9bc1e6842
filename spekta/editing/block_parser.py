"""
Block parser — parses SEARCH/REPLACE edit blocks returned by the LLM
into an ordered list of edit operations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import MalformedEditError

logger = logging.getLogger(__name__)

# Sentinels (matched against the trimmed line)
SEARCH_MARKER = "<<<<<<< SEARCH"
SEPARATOR = "======="
REPLACE_MARKER = ">>>>>>> REPLACE"

_FORMAT_HINT = (
    "Use format:\n"
    f"{SEARCH_MARKER}\n[content]\n{SEPARATOR}\n[replacement]\n{REPLACE_MARKER}"
)


@dataclass(frozen=True)
class EditBlock:
    """A single search/replace pair."""
    search: str
    replace: str


def parse_edit_blocks(raw: str) -> list[EditBlock]:
    """Parse every SEARCH/REPLACE block in *raw*, in source order.

    Text outside of blocks is ignored. Content lines are kept verbatim,
    including their indentation.

    Raises
    ------
    MalformedEditError
        If no block is found, or a block is missing its separator or its
        ``>>>>>>> REPLACE`` terminator. No partial result is returned.
    """
    lines = [line[:-1] if line.endswith("\r") else line
             for line in raw.split("\n")]
    blocks: list[EditBlock] = []
    i = 0

    while i < len(lines):
        if lines[i].strip() != SEARCH_MARKER:
            i += 1
            continue

        i += 1
        search_lines: list[str] = []
        while i < len(lines) and lines[i].strip() != SEPARATOR:
            search_lines.append(lines[i])
            i += 1
        if i >= len(lines):
            raise MalformedEditError(
                f"Invalid format: missing separator '{SEPARATOR}' "
                f"in block {len(blocks) + 1}"
            )
        i += 1  # skip separator

        replace_lines: list[str] = []
        while i < len(lines) and lines[i].strip() != REPLACE_MARKER:
            replace_lines.append(lines[i])
            i += 1
        if i >= len(lines):
            raise MalformedEditError(
                f"Invalid format: missing '{REPLACE_MARKER}' marker "
                f"in block {len(blocks) + 1}"
            )
        i += 1  # skip terminator

        blocks.append(EditBlock(
            search="\n".join(search_lines),
            replace="\n".join(replace_lines),
        ))

    if not blocks:
        raise MalformedEditError(f"No SEARCH/REPLACE blocks found. {_FORMAT_HINT}")

    logger.debug("[Replace] Parsed %d edit block(s)", len(blocks))
    return blocks
