"""Error classes for the Storefront GraphQL client."""
from __future__ import annotations

from typing import Optional

SNIPPET_LENGTH = 300


class GraphClientError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        snippet = message if len(message) <= SNIPPET_LENGTH else message[:SNIPPET_LENGTH]
        if status_code is not None:
            msg = f"HTTP {status_code}: {snippet}"
        else:
            msg = snippet
        super().__init__(msg)
        self.status_code = status_code


class ConfigurationError(GraphClientError, ValueError):
    """Raised by ``ClientBuilder.build`` for missing or invalid settings."""


class ResponseError(GraphClientError):
    """Raised when the endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "", body: str = "") -> None:
        message = f"Unexpected response: {reason}" if reason else "Unexpected response"
        if body:
            message = f"{message} - {body}"
        super().__init__(message, status_code)
        self.reason = reason


class TransportError(GraphClientError):
    """Raised when the request could not be sent after all retry attempts."""


class MalformedResponseError(GraphClientError):
    """Raised when a successful response body is not a JSON object."""


class InvalidDateFormatError(GraphClientError, ValueError):
    """Raised by ``parse_utc_datetime`` for unparseable input."""
