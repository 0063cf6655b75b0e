import os
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, PositiveInt

from commitsmith.config import (
    API_KEY_ENV_VAR,
    BASE_URL_ENV_VAR,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    MAX_DIFF_CHARS,
    MESSAGE_MAX_CHARS,
    MODEL_ENV_VAR,
)


CommitKind = Literal["feat", "fix", "docs", "style", "refactor", "test", "chore"]


class Commit(BaseModel):
    """A conventional commit parsed from the model reply.

    The kind travels as ``type`` on the wire. Unknown fields are rejected and
    nothing is coerced, so a reply that drifts from the schema never turns
    into a half-filled commit.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )

    kind: CommitKind = Field(alias="type")
    scope: str = ""
    message: str = Field(max_length=MESSAGE_MAX_CHARS)


class ChatMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class CompletionRequest(BaseModel):
    """Body of a ``POST /chat/completions`` request."""

    model: str
    messages: List[ChatMessage]
    temperature: float = DEFAULT_TEMPERATURE
    response_format: Optional[Dict[str, Any]] = None


class CompletionSettings(BaseModel):
    """Connection settings for the chat-completion endpoint."""

    api_key: Optional[str] = Field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout: Optional[PositiveFloat] = None

    @classmethod
    def from_env(
        cls,
        get_env: Callable[[str], Optional[str]] = os.getenv,
        **overrides: Any,
    ) -> "CompletionSettings":
        """Read settings from the environment; empty values fall back to defaults."""

        values: Dict[str, Any] = {
            "api_key": get_env(API_KEY_ENV_VAR) or None,
            "base_url": (get_env(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL).rstrip("/"),
            "model": get_env(MODEL_ENV_VAR) or DEFAULT_MODEL,
        }
        values.update(overrides)
        return cls(**values)


class PipelineOptions(BaseModel):
    """Optional stages of a commitsmith run."""

    stage_all: bool = False
    confirm_push: bool = False
    scope_required: bool = False
    max_diff_chars: PositiveInt = MAX_DIFF_CHARS
