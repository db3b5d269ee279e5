"""Exception hierarchy for the summarisation pipeline.

Every stage raises one of these; the web layer maps them to an HTTP status
via ``status_code`` and returns ``str(exc)`` as the user-visible message.
"""

from __future__ import annotations

from typing import Optional


class PipelineError(Exception):
    """Base exception for all pipeline failures."""

    status_code = 500


# Input
class InvalidInputError(PipelineError):
    """Missing or malformed target URL."""

    status_code = 400


# Source page
class SourceFetchError(PipelineError):
    """The target page could not be retrieved."""

    status_code = 502

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class FetchTimeoutError(SourceFetchError, TimeoutError):
    """The target page did not respond before the fetch timeout."""

    status_code = 504


class NoExtractableContentError(PipelineError):
    """The page contains no paragraph, heading or list-item text."""

    status_code = 422


# Completion service
class MissingCredentialError(PipelineError):
    """No API key is configured for the completion service."""


class CompletionServiceError(PipelineError):
    """The completion service answered with an error or was unreachable."""

    status_code = 502

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class EmptyCompletionError(PipelineError):
    """The completion service returned no textual content."""

    status_code = 502


class StructuredOutputNotFoundError(PipelineError):
    """No JSON object could be recovered from the model output."""

    status_code = 502


# Storage
class PersistenceError(PipelineError):
    """Saving or reading a summary record failed."""
