"""Git plumbing: collect the staged diff and run commit, add and push."""

import logging
import subprocess
from typing import Callable, Optional, Sequence

from commitsmith.config import MAX_DIFF_CHARS, TRUNCATION_MARKER
from commitsmith.errors import (
    EncodingError,
    NoChangesError,
    VcsInvocationError,
)
from commitsmith.settings import commitsmith_logger


DIFF_COMMAND = ("git", "diff", "--cached", "-b")
ADD_COMMAND = ("git", "add", ".")
PUSH_COMMAND = ("git", "push")

RunProcess = Callable[..., subprocess.CompletedProcess]


def truncate_diff(diff: str, max_chars: int = MAX_DIFF_CHARS) -> str:
    """Cap *diff* at *max_chars* characters and mark the cut.

    The marker is appended after the cut, so a truncated diff is exactly
    ``max_chars + len(TRUNCATION_MARKER)`` characters long.
    """

    if len(diff) <= max_chars:
        return diff
    return diff[:max_chars] + TRUNCATION_MARKER


class GitRepository:
    """Thin wrapper around the git commands the pipeline needs."""

    def __init__(
        self,
        run_process: Optional[RunProcess] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._run_process = run_process or subprocess.run
        self._logger = logger or commitsmith_logger(__name__)

    # --- Public API ---
    def staged_diff(self, max_chars: int = MAX_DIFF_CHARS) -> str:
        """Return the staged diff, truncated to *max_chars* characters.

        Raises:
            VcsInvocationError: If git cannot be run or exits non-zero.
            EncodingError: If the diff is not valid UTF-8.
            NoChangesError: If nothing is staged.
        """
        result = self._run(DIFF_COMMAND, capture=True)

        try:
            diff = result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            self._logger.debug("git diff output is not valid UTF-8: %s", exc)
            raise EncodingError(
                f"`{' '.join(DIFF_COMMAND)}` output is not valid UTF-8",
                command=DIFF_COMMAND,
                returncode=result.returncode,
            ) from exc

        if not diff.strip():
            self._logger.debug("No staged changes found")
            raise NoChangesError("No staged changes found. Stage files with `git add` first.")

        self._logger.debug("Staged diff length: %d characters", len(diff))
        if len(diff) > max_chars:
            self._logger.debug("Truncating diff to %d characters", max_chars)
        return truncate_diff(diff, max_chars)

    def stage_all(self) -> None:
        """Stage every change in the working tree."""

        self._run(ADD_COMMAND, capture=True)

    def commit(self, line: str) -> None:
        """Commit with *line* as the message, opening the editor for review."""

        self._run(("git", "commit", "-e", "-m", line), capture=False)

    def push(self) -> None:
        self._run(PUSH_COMMAND, capture=False)

    # --- Private helpers ---
    def _run(self, args: Sequence[str], *, capture: bool) -> subprocess.CompletedProcess:
        """Run a git command and fail on a non-zero exit status.

        Captured commands return raw bytes; the others inherit stdio so git
        can talk to the terminal and open an editor.
        """
        command = " ".join(args)
        self._logger.debug("Running command: %s", command)

        try:
            if capture:
                result = self._run_process(list(args), capture_output=True, check=False)
            else:
                result = self._run_process(list(args), check=False)
        except OSError as exc:
            self._logger.debug("Failed to run `%s`: %s", command, exc)
            raise VcsInvocationError(f"Failed to run `{command}`: {exc}", command=args) from exc

        if result.returncode != 0:
            stderr = _decode_stderr(result.stderr)
            self._logger.debug("`%s` exited with status %s", command, result.returncode)
            detail = f": {stderr}" if stderr else ""
            raise VcsInvocationError(
                f"`{command}` failed with status {result.returncode}{detail}",
                command=args,
                returncode=result.returncode,
                stderr=stderr,
            )

        return result


def _decode_stderr(stderr: Optional[bytes]) -> str:
    if not stderr:
        return ""
    return stderr.decode("utf-8", errors="replace").strip()
