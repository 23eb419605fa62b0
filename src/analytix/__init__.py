"""analytix - client for the analytics platform REST API"""

from typing import Any

from analytix.application.client import Client
from analytix.application.poller import Poller
from analytix.application.registry import ClientRegistry, default_registry
from analytix.domain.config import AppConfig, ConnectionConfig, PollOptions, RetrySpec
from analytix.domain.models import Profile, Project, RestResponse
from analytix.errors import (
    AnalytixError,
    AnalytixHTTPError,
    ArgumentError,
    AuthenticationError,
    HttpClientError,
    NotFoundError,
    TransientServerError,
    TransportError,
)
from analytix.infrastructure.http_client import Connection
from analytix.infrastructure.retry import RetryPolicy, retryable

__all__ = [
    "AnalytixError",
    "AnalytixHTTPError",
    "AppConfig",
    "ArgumentError",
    "AuthenticationError",
    "Client",
    "ClientRegistry",
    "Connection",
    "ConnectionConfig",
    "HttpClientError",
    "NotFoundError",
    "PollOptions",
    "Poller",
    "Profile",
    "Project",
    "RestResponse",
    "RetryPolicy",
    "RetrySpec",
    "TransientServerError",
    "TransportError",
    "connect",
    "current_client",
    "disconnect",
    "retryable",
]


def connect(*args: Any, **kwargs: Any) -> Client:
    """Connect and register the client in the default registry"""
    return default_registry.connect(*args, **kwargs)


def disconnect() -> None:
    default_registry.disconnect()


def current_client() -> Client:
    return default_registry.current
