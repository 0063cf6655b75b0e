from typing import Optional, Sequence


class CommitsmithError(Exception):
    """Base exception for commitsmith errors."""


class NoChangesError(CommitsmithError):
    """Raised when there are no staged changes to describe."""


class VcsInvocationError(CommitsmithError):
    """Raised when a git command cannot be run or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class EncodingError(VcsInvocationError):
    """Raised when git output cannot be decoded as UTF-8 text."""


class MissingCredentialError(CommitsmithError):
    """Raised when OPENAI_API_KEY is not configured."""


class TransportError(CommitsmithError):
    """Raised when the completion endpoint cannot be reached."""


class UpstreamError(CommitsmithError):
    """Raised when the completion endpoint answers with a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Completion request failed with status {status}: {body}")
        self.status = status
        self.body = body


class EmptyResponseError(CommitsmithError):
    """Raised when the completion endpoint returns no choices."""


class MalformedCommitError(CommitsmithError):
    """Raised when the model reply is not a valid commit object."""

    def __init__(self, raw: str, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Model reply is not a valid commit{detail}, raw: {raw!r}")
        self.raw = raw
        self.reason = reason


class InvalidResponseError(CommitsmithError):
    """Raised when a successful response is not a chat completion."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(f"{message}: {body}" if body else message)
        self.body = body
