"""Turn the raw model reply into a validated Commit."""

import logging
from typing import Optional

from pydantic import ValidationError

from commitsmith.errors import MalformedCommitError
from commitsmith.schemas import Commit
from commitsmith.settings import commitsmith_logger


_logger = commitsmith_logger(__name__)


def parse_commit(raw: str, logger: Optional[logging.Logger] = None) -> Commit:
    """Parse *raw* as a commit object.

    The reply is treated as untrusted text: anything that is not a JSON
    object with a known ``type`` and a ``message`` of at most 50 characters
    is rejected. A missing ``scope`` becomes the empty string.

    Raises:
        MalformedCommitError: If *raw* does not describe a valid commit.
    """
    logger = logger or _logger

    try:
        commit = Commit.model_validate_json(raw)
    except ValidationError as exc:
        reason = _describe(exc)
        logger.debug("Rejected model reply: %s", reason)
        raise MalformedCommitError(raw, reason) from exc

    logger.debug(
        "Parsed commit: type=%r, scope=%r, message=%r",
        commit.kind,
        commit.scope,
        commit.message,
    )
    return commit


def _describe(exc: ValidationError) -> str:
    """Summarize validation errors as ``field: problem`` pairs."""

    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
