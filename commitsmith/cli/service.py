import logging
from typing import Callable, Optional

from commitsmith.git import GitRepository
from commitsmith.llm import CompletionClient
from commitsmith.prompt import build_request
from commitsmith.schemas import Commit, CompletionSettings, PipelineOptions
from commitsmith.settings import commitsmith_logger
from commitsmith.validator import parse_commit


def default_client_factory() -> CompletionClient:
    return CompletionClient(CompletionSettings.from_env())


class CommitService:
    """Wire git, the completion client and the validator together."""

    def __init__(
        self,
        options: Optional[PipelineOptions] = None,
        repository: Optional[GitRepository] = None,
        client_factory: Callable[[], CompletionClient] = default_client_factory,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._logger = logger or commitsmith_logger(__name__)
        self.options = options or PipelineOptions()
        self.repository = repository or GitRepository()
        self._client_factory = client_factory

    # --- Public API ---
    def stage_all(self) -> None:
        self._logger.debug("Staging all changes...")
        self.repository.stage_all()

    def collect_diff(self) -> str:
        self._logger.debug("Collecting staged diff...")
        return self.repository.staged_diff(self.options.max_diff_chars)

    def generate_commit(self, diff: str) -> Commit:
        # The client validates credentials before anything goes on the wire.
        client = self._client_factory()

        request = build_request(
            diff,
            model=client.settings.model,
            scope_required=self.options.scope_required,
        )
        self._logger.debug("Sending diff of %d characters to the model", len(diff))

        raw = client.complete(request)
        return parse_commit(raw)

    def commit(self, line: str) -> None:
        self._logger.debug("Committing with message: %s", line)
        self.repository.commit(line)

    def push(self) -> None:
        self._logger.debug("Pushing to remote...")
        self.repository.push()
