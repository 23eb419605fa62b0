"""Exception hierarchy for the analytics platform client.

Callers can react to high-level categories (argument problems, transient
server failures, client-side HTTP errors) while the HTTP subclasses keep the
status code, URI and response that produced them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from analytix.domain.models.response import RestResponse

__all__ = [
    "AnalytixError",
    "ArgumentError",
    "AnalytixHTTPError",
    "TransientServerError",
    "HttpClientError",
    "NotFoundError",
    "AuthenticationError",
    "TransportError",
]


class AnalytixError(RuntimeError):
    """Base exception for platform client failures."""


class ArgumentError(AnalytixError, ValueError):
    """Raised when a call is made with missing or invalid arguments."""


class AnalytixHTTPError(AnalytixError):
    """Raised when the platform answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        uri: str,
        response: Optional["RestResponse"] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.uri = uri
        self.response = response


class TransientServerError(AnalytixHTTPError):
    """5xx response; safe to retry."""


class HttpClientError(AnalytixHTTPError):
    """4xx response."""


class NotFoundError(HttpClientError):
    """404 response."""


class AuthenticationError(HttpClientError):
    """401/403 response or rejected credentials."""


class TransportError(AnalytixError):
    """Raised when the request never produced a response (network failure)."""
