#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Module for sending commit requests to an OpenAI-compatible chat endpoint."""

import logging
from typing import List, Optional

import openai
from dotenv import load_dotenv
from langchain_openai import ChatOpenAI
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from commitsmith.config import API_KEY_ENV_VAR
from commitsmith.schemas import CompletionRequest, CompletionSettings
from commitsmith.settings import commitsmith_logger
from commitsmith.errors import (
    EmptyResponseError,
    InvalidResponseError,
    MissingCredentialError,
    TransportError,
    UpstreamError,
)

# Load .env automatically
load_dotenv()


class CompletionClient:
    """Send one chat-completion request and return the raw reply text.

    The request goes to ``{base_url}/chat/completions`` with bearer
    authentication. Retries are disabled: every call makes exactly one
    outbound request, and any failure is raised to the caller.

    Attributes:
        settings (CompletionSettings): Endpoint, model and credentials.
        llm (BaseChatModel): The chat model used to send requests.
    """

    # --- Initialization ---
    def __init__(
        self,
        settings: CompletionSettings,
        llm: Optional[BaseChatModel] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Endpoint, model and credentials to use.
            llm: Pre-configured chat model instance.
            logger: Logger override.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        self._logger = logger or commitsmith_logger(__name__)
        self.settings = settings

        self._validate_api_key()
        self.llm = llm or self._build_model()

    # --- Public methods ---
    def complete(self, request: CompletionRequest) -> str:
        """Send *request* and return ``choices[0].message.content``.

        Raises:
            TransportError: If the endpoint cannot be reached.
            UpstreamError: If the endpoint answers with a non-2xx status.
            EmptyResponseError: If no choices are returned.
            InvalidResponseError: If a successful response cannot be parsed.
        """
        self._logger.debug(
            "Requesting completion from %s with model %s",
            self.settings.base_url,
            request.model,
        )

        messages = self._build_messages(request)
        params = {"model": request.model, "temperature": request.temperature}
        if request.response_format is not None:
            params["response_format"] = request.response_format

        try:
            result = self.llm.generate([messages], **params)
        except openai.APIStatusError as exc:
            body = exc.response.text
            self._logger.debug("Completion request failed with status %s", exc.status_code)
            raise UpstreamError(exc.status_code, body) from exc
        except openai.APIConnectionError as exc:
            self._logger.debug("Completion request failed: %s", exc)
            raise TransportError(
                f"Could not reach {self.settings.base_url}: {exc}"
            ) from exc
        except openai.APIError as exc:
            body = exc.response.text if getattr(exc, "response", None) is not None else ""
            self._logger.debug("Completion response rejected by the client: %s", exc)
            raise InvalidResponseError("Failed to parse completion response", body) from exc
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            # A 2xx body that is not JSON reaches the parser as a plain string.
            self._logger.debug("Completion response could not be parsed: %r", exc)
            raise InvalidResponseError("Failed to parse completion response", str(exc)) from exc

        generations = result.generations[0] if result.generations else []
        if not generations:
            self._logger.debug("Completion response contained no choices")
            raise EmptyResponseError("Completion response contained no choices")

        content = generations[0].text
        self._logger.debug("Raw completion content: %r", content)
        return content

    # --- Private methods ---
    def _validate_api_key(self) -> None:
        """Validate that an API key is configured.

        Raises:
            MissingCredentialError: If the API key is missing.
        """
        self._logger.debug("Validating %s", API_KEY_ENV_VAR)

        if not self.settings.api_key:
            error_msg = f"Missing {API_KEY_ENV_VAR}. Set it in your environment or .env file."
            self._logger.debug(error_msg)
            raise MissingCredentialError(error_msg)

        self._logger.debug("%s found", API_KEY_ENV_VAR)

    def _build_model(self) -> ChatOpenAI:
        """Build a ChatOpenAI instance that never retries."""

        self._logger.debug("Building ChatOpenAI model with name: %s", self.settings.model)

        return ChatOpenAI(
            model=self.settings.model,
            api_key=self.settings.api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout,
            max_retries=0,
        )

    # --- Internal helpers ---
    @staticmethod
    def _build_messages(request: CompletionRequest) -> List[BaseMessage]:
        """Convert request messages into LangChain messages."""

        message_types = {"system": SystemMessage, "user": HumanMessage}
        return [
            message_types[message.role](content=message.content)
            for message in request.messages
        ]

    # --- Dunder methods ---
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(model={self.settings.model!r}, "
            f"base_url={self.settings.base_url!r})"
        )
