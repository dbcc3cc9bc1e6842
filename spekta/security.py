"""
Access control — decides whether a file may be read or edited at all.

Checks, in order: restricted file names, project-root containment,
.spektaignore patterns, git ignore rules, file size and (for edits) git
tracking. Any failure raises :class:`AccessDeniedError`.
"""

from __future__ import annotations

import fnmatch
import logging
import os

from . import git_utils
from .config import Config

logger = logging.getLogger(__name__)

_HOME_DIR = os.path.join(os.path.expanduser("~"), ".spekta")


class AccessDeniedError(Exception):
    """Raised when a path fails an access-control check."""


def load_ignore_patterns(project_root: str, ignore_file: str = ".spektaignore") -> list[str]:
    """Read ignore patterns from the project, falling back to ``~/.spekta``."""
    candidates = [
        os.path.join(project_root, ignore_file),
        os.path.join(_HOME_DIR, ignore_file),
    ]
    for path in candidates:
        if not os.path.isfile(path):
            continue
        patterns: list[str] = []
        with open(path, encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)
        return patterns
    return []


def is_ignored(rel_path: str, patterns: list[str]) -> bool:
    """Return True if *rel_path* (POSIX separators) matches any pattern.

    A pattern matches the basename, the whole relative path, or any leading
    directory of it; ``dir/`` only matches directories.
    """
    rel_path = rel_path.replace(os.sep, "/")
    parts = rel_path.split("/")
    name = parts[-1]
    dirs = ["/".join(parts[:i]) for i in range(1, len(parts))]

    for pattern in patterns:
        dir_only = pattern.endswith("/")
        pattern = pattern.strip("/")
        if not pattern:
            continue
        if not dir_only:
            if fnmatch.fnmatch(name, pattern) or fnmatch.fnmatch(rel_path, pattern):
                return True
        for d in dirs:
            if fnmatch.fnmatch(d, pattern) or fnmatch.fnmatch(d.rsplit("/", 1)[-1], pattern):
                return True
    return False


class AccessGate:
    """Access-control checks relative to a project root."""

    def __init__(self, config: Config | None = None,
                 project_root: str | None = None) -> None:
        self._config = config or Config()
        self._root = os.path.abspath(project_root or os.getcwd())

    @property
    def project_root(self) -> str:
        return self._root

    def validate_path_access(self, file_path: str) -> None:
        """Checks shared by reads and edits of an existing file."""
        abs_path = os.path.abspath(os.path.join(self._root, file_path))
        file_name = os.path.basename(abs_path)
        rel_path = os.path.relpath(abs_path, self._root)

        if file_name in self._config.RESTRICTED_FILES:
            self._deny(f"{file_name} is a restricted system file.")

        if rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep) \
                or os.path.isabs(rel_path):
            self._deny(f"{file_path} is outside the project directory.")

        patterns = load_ignore_patterns(self._root, self._config.IGNORE_FILE)
        if is_ignored(rel_path, patterns):
            self._deny(f"{file_path} is ignored by {self._config.IGNORE_FILE}.")

        if git_utils.is_ignored(rel_path, cwd=self._root):
            self._deny(f"{file_path} is ignored by git.")

        if not os.path.isfile(abs_path):
            self._deny(f"{file_path} does not exist.")

        limit = self._config.max_file_size_bytes
        if os.path.getsize(abs_path) > limit:
            self._deny(
                f"File exceeds size limit ({self._config.MAX_FILE_SIZE_MB:g}MB)."
            )

    def validate_git_tracked(self, file_path: str) -> None:
        """Edits are only allowed on files git already tracks."""
        if not git_utils.is_git_repo(cwd=self._root):
            raise AccessDeniedError(
                f"Edit Denied: {self._root} is not inside a git repository. "
                "Only tracked files can be edited."
            )
        abs_path = os.path.abspath(os.path.join(self._root, file_path))
        rel_path = os.path.relpath(abs_path, self._root)
        if not git_utils.is_tracked(rel_path, cwd=self._root):
            raise AccessDeniedError(
                f"Edit Denied: {file_path} is not tracked by git. "
                "Only tracked files can be edited."
            )

    def validate(self, file_path: str) -> None:
        """Full gate for edit operations."""
        self.validate_path_access(file_path)
        if self._config.REQUIRE_GIT_TRACKED:
            self.validate_git_tracked(file_path)
        logger.debug("[Security] Edit access granted for %s", file_path)

    @staticmethod
    def _deny(reason: str) -> None:
        logger.warning("[Security] Access denied: %s", reason)
        raise AccessDeniedError(f"Access Denied: {reason}")
