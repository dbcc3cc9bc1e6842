"""Tests for the programmatic replace API."""

import json
import os

import pytest

from spekta import AccessDeniedError, replace_in_file
from spekta import git_utils
from spekta.config import Config
from spekta.editing.block_parser import EditBlock
from spekta.editing.errors import NotFoundError, StaleWriteError


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.setattr(git_utils, "is_ignored", lambda path, cwd=None: False)
    monkeypatch.setattr(git_utils, "is_tracked", lambda path, cwd=None: True)
    monkeypatch.setattr(git_utils, "is_git_repo", lambda cwd=None: True)
    (tmp_path / "mod.py").write_bytes(b"def f():\n    return 1\n")
    return tmp_path


def _metrics(root):
    path = root / ".spekta" / "metrics" / "edit_metrics.jsonl"
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestReplaceInFile:
    def test_applies_relative_to_project_root(self, project):
        report = replace_in_file(
            "mod.py", [EditBlock("return 1", "return 2")],
            config=Config(), project_root=str(project),
        )

        assert report.written is True
        assert (project / "mod.py").read_bytes() == b"def f():\n    return 2\n"
        assert _metrics(project)[0]["applied"] == 1

    def test_string_line_range(self, project):
        report = replace_in_file(
            "mod.py", [EditBlock("return 1", "return 2")],
            line_range="2,2", dry_run=True,
            config=Config(), project_root=str(project),
        )
        assert report.applied_edits[0].start_line == 2
        assert (project / "mod.py").read_bytes() == b"def f():\n    return 1\n"

    def test_failure_recorded_and_raised(self, project):
        with pytest.raises(NotFoundError):
            replace_in_file(
                "mod.py", [EditBlock("return 42", "return 2")],
                config=Config(), project_root=str(project),
            )
        entry = _metrics(project)[0]
        assert entry["error_kind"] == "NotFoundError"
        assert entry["blocks"] == 1

    def test_file_deleted_during_review_recorded(self, project):
        def delete_then_approve(path, old, new):
            os.unlink(path)
            return True

        with pytest.raises(StaleWriteError):
            replace_in_file(
                "mod.py", [EditBlock("return 1", "return 2")],
                approve=delete_then_approve,
                config=Config(), project_root=str(project),
            )
        assert _metrics(project)[0]["error_kind"] == "StaleWriteError"

    def test_access_denied(self, project, monkeypatch):
        monkeypatch.setattr(git_utils, "is_tracked", lambda path, cwd=None: False)
        with pytest.raises(AccessDeniedError):
            replace_in_file(
                "mod.py", [EditBlock("return 1", "return 2")],
                config=Config(), project_root=str(project),
            )

    def test_metrics_disabled(self, project):
        replace_in_file(
            "mod.py", [EditBlock("return 1", "return 2")],
            config=Config({"metrics": False}), project_root=str(project),
        )
        assert not (project / ".spekta").exists()
