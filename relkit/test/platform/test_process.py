"""Tests for relkit.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relkit.core.result import Err, Ok
from relkit.platform.process import ProcessError, merged_env, run


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(
            command=("git", "status"),
            returncode=1,
            stdout="",
            stderr="fatal: not a git repository",
        )
        assert str(error) == "git status failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("gh", "api", "--method", "POST", "repos/a/b/git/refs"),
            returncode=1,
            stdout="",
            stderr="",
        )
        assert str(error) == "gh api --method ... failed (exit 1)"

    def test_detail_prefers_stderr(self) -> None:
        error = ProcessError(("git",), 1, "out text", "  err text \n")
        assert error.detail == "err text"
        assert ProcessError(("git",), 1, "out text", "").detail == "out text"
        assert ProcessError(("git", "push"), 2, "", "").detail == "git push failed (exit 2)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1, "", "")
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRun:
    def test_success_returns_stdout(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "print('hello')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "hello" in result.value

    def test_failure_returns_error(self, tmp_path: Path) -> None:
        result = run([sys.executable, "-c", "import sys; sys.exit(42)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 42

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert len(result.error.stderr) > 0

    def test_captures_stderr(self, tmp_path: Path) -> None:
        result = run(
            [sys.executable, "-c", "import sys; sys.stderr.write('error msg'); sys.exit(1)"],
            cwd=tmp_path,
        )

        assert isinstance(result, Err)
        assert "error msg" in result.error.stderr

    def test_passes_env(self, tmp_path: Path) -> None:
        env = merged_env({"RELKIT_PROBE": "42"})
        result = run(
            [sys.executable, "-c", "import os; print(os.environ['RELKIT_PROBE'])"],
            cwd=tmp_path,
            env=env,
        )

        assert isinstance(result, Ok)
        assert result.value.strip() == "42"


def test_merged_env_overlays(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RELKIT_BASE", "kept")
    env = merged_env({"GH_TOKEN": "t"})
    assert env["RELKIT_BASE"] == "kept"
    assert env["GH_TOKEN"] == "t"
