"""AI summarisation using the Claude API.

``Summarizer.request_summary()`` sends the prepared article text with a fixed
instruction asking for a title and at most three key points as JSON, and
returns the raw completion text. Recovering the JSON object from that text
is left to ``core.parsing``: the model is asked for JSON only, but the
answer is not trusted to be clean.

The Anthropic client is lazy-initialised so that the class can be
instantiated in tests without requiring a live API key.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import anthropic

from core.errors import (
    CompletionServiceError,
    EmptyCompletionError,
    MissingCredentialError,
)

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)


#: System prompt describing the required output shape.
SUMMARY_SYSTEM = (
    "You are an expert at summarising articles. Summarise the following text "
    "as a title and at most 3 key points. Reply only with JSON using this "
    "structure:\n\n"
    "{\n"
    '  "title": "The article title",\n'
    '  "summary_points": [\n'
    '    "Key point 1",\n'
    '    "Key point 2",\n'
    '    "Key point 3"\n'
    "  ]\n"
    "}\n"
)


def build_user_message(text: str) -> str:
    """Embed the article text verbatim in the user turn."""
    return f"The text to analyse is: '{text}'"


class Summarizer:
    """Requests title + key-point summaries from the Claude API.

    The call is bounded by ``settings.completion_timeout`` and never retried;
    a failure is surfaced to the caller immediately.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialise the summariser.

        Args:
            settings: Application configuration, including the API key.
        """
        self.settings = settings
        self._client: anthropic.Anthropic | None = None

    @property
    def client(self) -> anthropic.Anthropic:
        """Lazy-initialise and return the Anthropic SDK client.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        if self._client is None:
            self.settings.validate()
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.completion_timeout,
                max_retries=0,
            )
        return self._client

    def request_summary(self, text: str) -> str:
        """Ask the model to summarise *text* and return its raw reply.

        Args:
            text: Normalised, clamped article text.

        Returns:
            The text of the first text block in the response.

        Raises:
            MissingCredentialError: If no API key is configured.
            CompletionServiceError: On an error status, timeout or connection
                failure.
            EmptyCompletionError: If the response carries no text.
        """
        client = self.client

        try:
            response = client.messages.create(
                model=self.settings.summary_model,
                max_tokens=self.settings.summary_max_tokens,
                temperature=self.settings.summary_temperature,
                system=SUMMARY_SYSTEM,
                messages=[{"role": "user", "content": build_user_message(text)}],
            )
        except anthropic.APIStatusError as exc:
            body = exc.response.text if exc.response is not None else ""
            logger.error("Completion service returned HTTP %d", exc.status_code)
            raise CompletionServiceError(
                f"Completion service error: {exc.status_code} {body}".strip(),
                status=exc.status_code,
                body=body,
            ) from exc
        except anthropic.APIConnectionError as exc:
            # APITimeoutError is a subclass
            logger.error("Completion service unreachable: %s", exc)
            raise CompletionServiceError(
                f"Completion service unreachable: {exc}",
                body=str(exc),
            ) from exc

        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "text":
                content = getattr(block, "text", "") or ""
                if content.strip():
                    return content
                break

        raise EmptyCompletionError("The completion service returned an empty response.")
