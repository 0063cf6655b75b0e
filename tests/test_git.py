"""Unit tests for the git wrapper."""

import subprocess
from typing import Any, List, Optional

import pytest

from commitsmith.config import MAX_DIFF_CHARS, TRUNCATION_MARKER
from commitsmith.errors import (
    EncodingError,
    NoChangesError,
    VcsInvocationError,
)
from commitsmith.git import DIFF_COMMAND, GitRepository, truncate_diff


class FakeRunProcess:
    """Records git invocations and replays a canned result."""

    def __init__(
        self,
        stdout: bytes = b"",
        *,
        returncode: int = 0,
        stderr: bytes = b"",
        error: Optional[Exception] = None,
    ) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.calls: List[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, args, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append((list(args), kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(
            args=args,
            returncode=self.returncode,
            stdout=self.stdout if kwargs.get("capture_output") else None,
            stderr=self.stderr if kwargs.get("capture_output") else None,
        )


# === truncate_diff() =====================================================


def test_truncate_diff_returns_short_diff_unchanged():
    diff = "diff --git a/foo b/foo\n+bar\n"

    assert truncate_diff(diff) == diff


def test_truncate_diff_keeps_diff_at_exact_limit():
    diff = "x" * MAX_DIFF_CHARS

    assert truncate_diff(diff) == diff
    assert TRUNCATION_MARKER not in truncate_diff(diff)


def test_truncate_diff_cuts_long_diff_and_appends_marker():
    diff = "a" * MAX_DIFF_CHARS + "b" * 100

    truncated = truncate_diff(diff)

    assert truncated == "a" * MAX_DIFF_CHARS + "\n... (truncated)"
    assert len(truncated) == MAX_DIFF_CHARS + len(TRUNCATION_MARKER)


def test_truncate_diff_counts_characters_not_bytes():
    diff = "é" * 20

    truncated = truncate_diff(diff, max_chars=10)

    assert truncated == "é" * 10 + TRUNCATION_MARKER


# === staged_diff() =======================================================


def test_staged_diff_runs_cached_diff_ignoring_whitespace():
    run = FakeRunProcess(b"diff --git a/foo b/foo\n+bar\n")
    repo = GitRepository(run_process=run)

    diff = repo.staged_diff()

    assert diff == "diff --git a/foo b/foo\n+bar\n"
    args, kwargs = run.calls[0]
    assert tuple(args) == DIFF_COMMAND == ("git", "diff", "--cached", "-b")
    assert kwargs["capture_output"] is True


def test_staged_diff_truncates_to_budget():
    run = FakeRunProcess(("ü" * 50).encode("utf-8"))
    repo = GitRepository(run_process=run)

    diff = repo.staged_diff(max_chars=8)

    assert diff == "ü" * 8 + TRUNCATION_MARKER


@pytest.mark.parametrize("output", [b"", b"   \n\t\n"])
def test_staged_diff_without_changes_raises(output):
    repo = GitRepository(run_process=FakeRunProcess(output))

    with pytest.raises(NoChangesError):
        repo.staged_diff()


def test_staged_diff_non_zero_exit_raises_with_context():
    run = FakeRunProcess(returncode=128, stderr=b"fatal: not a git repository\n")
    repo = GitRepository(run_process=run)

    with pytest.raises(VcsInvocationError) as excinfo:
        repo.staged_diff()

    error = excinfo.value
    assert error.returncode == 128
    assert error.command == DIFF_COMMAND
    assert error.stderr == "fatal: not a git repository"
    assert "git diff --cached -b" in str(error)


def test_staged_diff_invalid_utf8_raises_encoding_error():
    repo = GitRepository(run_process=FakeRunProcess(b"+caf\xe9\n"))

    with pytest.raises(EncodingError) as excinfo:
        repo.staged_diff()

    assert isinstance(excinfo.value, VcsInvocationError)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_missing_git_binary_raises_vcs_error():
    run = FakeRunProcess(error=FileNotFoundError("git"))
    repo = GitRepository(run_process=run)

    with pytest.raises(VcsInvocationError):
        repo.staged_diff()


# === commit driver =======================================================


def test_commit_opens_editor_and_inherits_stdio():
    run = FakeRunProcess()
    repo = GitRepository(run_process=run)

    repo.commit("feat(auth): add token refresh")

    args, kwargs = run.calls[0]
    assert args == ["git", "commit", "-e", "-m", "feat(auth): add token refresh"]
    assert "capture_output" not in kwargs


def test_commit_failure_raises():
    repo = GitRepository(run_process=FakeRunProcess(returncode=1))

    with pytest.raises(VcsInvocationError) as excinfo:
        repo.commit("fix: something")

    assert excinfo.value.returncode == 1
    assert excinfo.value.command[:2] == ("git", "commit")


def test_stage_all_adds_everything():
    run = FakeRunProcess()
    repo = GitRepository(run_process=run)

    repo.stage_all()

    assert run.calls[0][0] == ["git", "add", "."]


def test_push_failure_raises():
    run = FakeRunProcess(returncode=1)
    repo = GitRepository(run_process=run)

    with pytest.raises(VcsInvocationError):
        repo.push()

    assert run.calls[0][0] == ["git", "push"]
