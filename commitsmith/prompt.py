"""Build the chat-completion request for a staged diff."""

from typing import Any, Dict

from commitsmith.config import (
    COMMIT_KINDS,
    DEFAULT_TEMPERATURE,
    MESSAGE_MAX_CHARS,
    SCHEMA_NAME,
    SYSTEM_PROMPT,
    USER_PROMPT_PREFIX,
)
from commitsmith.schemas import ChatMessage, CompletionRequest


def commit_schema(scope_required: bool = False) -> Dict[str, Any]:
    """Return the JSON schema the model reply must follow.

    Strict structured output on some endpoints insists that every property
    is listed in ``required``; ``scope_required`` selects that variant.
    """
    required = ["type", "scope", "message"] if scope_required else ["type", "message"]
    return {
        "type": "object",
        "additionalProperties": False,
        "required": required,
        "properties": {
            "type": {"type": "string", "enum": list(COMMIT_KINDS)},
            "scope": {"type": "string"},
            "message": {"type": "string", "maxLength": MESSAGE_MAX_CHARS},
        },
    }


def build_request(
    diff: str,
    model: str,
    temperature: float = DEFAULT_TEMPERATURE,
    scope_required: bool = False,
) -> CompletionRequest:
    """Assemble the system instruction, the diff and the output schema."""

    return CompletionRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=f"{USER_PROMPT_PREFIX}{diff}"),
        ],
        temperature=temperature,
        response_format={
            "type": "json_schema",
            "json_schema": {
                "name": SCHEMA_NAME,
                "schema": commit_schema(scope_required),
                "strict": True,
            },
        },
    )
