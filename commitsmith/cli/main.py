import sys

import click

from commitsmith.config import MAX_DIFF_CHARS
from commitsmith.schemas import PipelineOptions
from commitsmith.settings import set_commitsmith_log_level

from .service import CommitService
from .controller import CommitController


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--stage", "-a", is_flag=True, help="Run `git add .` before collecting the diff.")
@click.option("--push", "-p", is_flag=True, help="Offer to push after a successful commit.")
@click.option(
    "--require-scope/--optional-scope",
    default=False,
    help="Ask the model to always fill in a scope.",
)
@click.option(
    "--max-diff-chars",
    type=click.IntRange(min=1),
    default=MAX_DIFF_CHARS,
    show_default=True,
    help="Truncate the staged diff after this many characters.",
)
def run_commitsmith(
    debug: bool,
    stage: bool,
    push: bool,
    require_scope: bool,
    max_diff_chars: int,
) -> None:
    """Write a conventional commit message for the staged changes and commit.

    \b
    Workflow:
      1. git diff --cached -b      (after `git add .` with --stage)
      2. the diff is sent to the chat-completion endpoint
      3. git commit -e -m "<type>(<scope>): <message>"
      4. git push                  (with --push, after confirmation)

    \b
    Environment:
      OPENAI_API_KEY   required, also read from a .env file
      OPENAI_BASE_URL  default https://api.openai.com/v1
      OPENAI_MODEL     default gpt-4.1-mini
    """
    if debug:
        set_commitsmith_log_level("DEBUG")

    options = PipelineOptions(
        stage_all=stage,
        confirm_push=push,
        scope_required=require_scope,
        max_diff_chars=max_diff_chars,
    )
    service = CommitService(options=options)
    controller = CommitController(service)

    sys.exit(controller.run())


if __name__ == "__main__":
    run_commitsmith()
