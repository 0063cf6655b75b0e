import logging
from typing import Callable, Optional

import click

from commitsmith.errors import (
    CommitsmithError,
    MalformedCommitError,
    NoChangesError,
    UpstreamError,
    VcsInvocationError,
)
from commitsmith.schemas import PipelineOptions
from commitsmith.settings import commitsmith_logger
from commitsmith.utils import build_commit_line

from .service import CommitService


class CommitController:
    """Main controller orchestrating the CLI workflow.

    Every message goes to stderr; stdout is left to git.
    """

    def __init__(
        self,
        commit_service: CommitService,
        options: Optional[PipelineOptions] = None,
        logger: Optional[logging.Logger] = None,
        echo: Callable[..., None] = click.echo,
        echo_err: Optional[Callable[[str], None]] = None,
        confirm: Callable[..., bool] = click.confirm,
    ) -> None:
        self._logger = logger or commitsmith_logger(__name__)
        self._echo_err = echo_err or (lambda message: echo(message, err=True))
        self._confirm = confirm
        self.commit_service = commit_service
        self.options = options or commit_service.options

    # --- Public API ---
    def run(self) -> int:
        self._logger.debug("Starting CLI controller run")

        try:
            self._run_pipeline()
        except NoChangesError as e:
            self._echo_err(f"--- ❌ {e} ---")
            return 1
        except VcsInvocationError as e:
            self._echo_err(f"❌ Git command failed: {e}")
            return 1
        except UpstreamError as e:
            self._echo_err(f"❌ Completion endpoint returned HTTP {e.status}: {e.body}")
            return 1
        except MalformedCommitError as e:
            self._echo_err(f"❌ Model returned an invalid commit: {e.reason}")
            self._echo_err(f"   raw reply: {e.raw!r}")
            return 1
        except CommitsmithError as e:
            self._echo_err(f"❌ Failed to generate commit message: {e}")
            return 1

        self._logger.debug("CLI controller run finished")
        return 0

    # --- Private helpers ---
    def _run_pipeline(self) -> None:
        if self.options.stage_all:
            self._echo_err("📦 Staging all changes...")
            self.commit_service.stage_all()

        diff = self.commit_service.collect_diff()

        self._echo_err("🤖 Staged diff found; generating commit message...")
        commit = self.commit_service.generate_commit(diff)
        line = build_commit_line(commit)
        self._echo_err(f"📝 {line}")

        self.commit_service.commit(line)
        self._echo_err("✅ Commit created successfully.")

        if self.options.confirm_push:
            self._maybe_push()

    def _maybe_push(self) -> None:
        # default=None makes click re-prompt until it gets a clear yes or no.
        if not self._confirm("Push to remote?", default=None, err=True):
            self._logger.info("Push declined")
            self._echo_err("Push skipped.")
            return

        self.commit_service.push()
        self._echo_err("🚀 Pushed successfully.")
