"""Polling configuration models."""

from pydantic import BaseModel, ConfigDict, Field

from analytix.domain.config.retry import RetrySpec
from analytix.errors import TransientServerError

DEFAULT_SLEEP_INTERVAL = 10.0
DEFAULT_COMPLETION_CODE = 202
POLL_RETRY = RetrySpec(max_attempts=3, on=(TransientServerError,))


class PollConfig(BaseModel):
    """Client-wide polling defaults.

    Attributes:
        sleep_interval: Seconds to wait between polls
        completion_code: Status code meaning "still processing"
    """

    sleep_interval: float = Field(DEFAULT_SLEEP_INTERVAL, ge=0.0)
    completion_code: int = Field(DEFAULT_COMPLETION_CODE, ge=100, le=599)


class PollOptions(BaseModel):
    """Options of a single poll call.

    Attributes:
        completion_code: Keep polling while the response has this code
            (status-code mode only)
        sleep_interval: Seconds to wait before each re-fetch
        process: Return a decoded response (status-code mode only)
        retry: Retry rule for each re-fetch
    """

    completion_code: int = Field(DEFAULT_COMPLETION_CODE, ge=100, le=599)
    sleep_interval: float = Field(DEFAULT_SLEEP_INTERVAL, ge=0.0)
    process: bool = True
    retry: RetrySpec = POLL_RETRY

    model_config = ConfigDict(frozen=True, extra="forbid")
