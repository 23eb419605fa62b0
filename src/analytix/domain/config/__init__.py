"""Configuration models with Pydantic validation."""

from analytix.domain.config.app import AppConfig
from analytix.domain.config.connection import ConnectionConfig
from analytix.domain.config.poll import PollConfig, PollOptions
from analytix.domain.config.retry import RetrySpec, TransportRetryConfig

__all__ = [
    "AppConfig",
    "ConnectionConfig",
    "PollConfig",
    "PollOptions",
    "RetrySpec",
    "TransportRetryConfig",
]
