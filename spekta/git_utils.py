"""
Git integration — queries used by the access-control gate.
"""

import subprocess


def _run_git(args: list[str], cwd: str | None = None) -> tuple[bool, str]:
    """Run a git command and return ``(success, output)``."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        output = (result.stdout + result.stderr).strip()
        return result.returncode == 0, output
    except OSError as e:
        return False, str(e)


def is_git_repo(cwd: str | None = None) -> bool:
    """Return ``True`` if *cwd* (default: CWD) is inside a git work tree."""
    ok, _ = _run_git(["rev-parse", "--is-inside-work-tree"], cwd=cwd)
    return ok


def is_tracked(path: str, cwd: str | None = None) -> bool:
    """Return ``True`` if *path* is tracked by git."""
    ok, _ = _run_git(["ls-files", "--error-unmatch", "--", path], cwd=cwd)
    return ok


def is_ignored(path: str, cwd: str | None = None) -> bool:
    """Return ``True`` if git's ignore rules match *path*.

    ``git check-ignore`` exits 0 when the path is ignored, 1 when it is not.
    """
    ok, _ = _run_git(["check-ignore", "-q", "--", path], cwd=cwd)
    return ok
