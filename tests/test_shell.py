"""Tests for process execution helpers."""

import sys

import pytest

from cabal_inventory import git
from cabal_inventory.shell import ShellCommandError, execute, tool_available


def test_execute_captures_stripped_stdout():
    assert execute(sys.executable, "-c", "print('  9.4.7  ')") == ("9.4.7", True)


def test_allowed_failure_returns_empty():
    assert execute(sys.executable, "-c", "import sys; print('x'); sys.exit(3)", allow_failure=True) == ("", False)


def test_failure_raises_when_not_allowed():
    with pytest.raises(ShellCommandError):
        execute(sys.executable, "-c", "import sys; sys.exit(1)")


def test_missing_executable():
    assert execute("definitely-not-a-real-tool-xyz", allow_failure=True) == ("", False)
    with pytest.raises(ShellCommandError):
        execute("definitely-not-a-real-tool-xyz")


def test_timeout_is_an_allowed_failure():
    result = execute(sys.executable, "-c", "import time; time.sleep(5)", allow_failure=True, timeout=0.2)
    assert result == ("", False)


def test_tool_available():
    assert tool_available(sys.executable)
    assert not tool_available("definitely-not-a-real-tool-xyz")


def test_repository_root_outside_git(tmp_path, monkeypatch):
    calls = []

    def failing(*args, **kwargs):
        calls.append(kwargs)
        raise ShellCommandError("fatal: not a git repository")

    monkeypatch.setattr(git.shell, "execute", failing)
    assert git.repository_root(tmp_path) is None
    assert "allow_failure" not in calls[0]


def test_repository_root_inside_git(tmp_path, monkeypatch):
    monkeypatch.setattr(git.shell, "execute", lambda *a, **kw: ("/repo", True))
    assert str(git.repository_root(tmp_path)) == "/repo"


def test_repository_root_of_real_work_tree(tmp_path):
    if not tool_available("git"):
        pytest.skip("git is not installed")
    execute("git", "init", "--quiet", str(tmp_path))
    (tmp_path / "pkg").mkdir()
    assert git.repository_root(tmp_path / "pkg").resolve() == tmp_path.resolve()
