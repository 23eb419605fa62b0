"""Retry configuration models."""

from typing import Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


class RetrySpec(BaseModel):
    """Retry rule for a single guarded call.

    Attributes:
        max_attempts: Retry budget, i.e. how many more times the call may be
            invoked after its first failure (0 = call once, never retry)
        on: Exception classes that trigger a retry; anything else propagates
    """

    max_attempts: int = Field(1, ge=0)
    on: Tuple[Type[BaseException], ...] = (Exception,)

    model_config = ConfigDict(frozen=True, extra="forbid")


class TransportRetryConfig(BaseModel):
    """Configuration for transport-level retries of network failures.

    Attributes:
        max_attempts: Maximum number of attempts
        initial_delay: Initial delay in seconds
        backoff_multiplier: Exponential backoff multiplier
        jitter: Random jitter factor (0.0-1.0)
    """

    max_attempts: int = Field(3, gt=0, le=10)
    initial_delay: float = Field(1.0, ge=0.0)  # Allow 0 for tests
    backoff_multiplier: float = Field(2.0, ge=1.0, le=10.0)
    jitter: float = Field(0.1, ge=0.0, le=1.0)
