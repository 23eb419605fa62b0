"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from analytix.domain.config.connection import ConnectionConfig
from analytix.domain.config.poll import PollConfig


class AppConfig(BaseModel):
    """Main application configuration.

    Root model aggregating all configuration sections. Validation is performed
    at load time to fail fast on configuration errors.

    Attributes:
        connection: Platform connection configuration
        poll: Polling defaults
    """

    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    poll: PollConfig = Field(default_factory=PollConfig)

    model_config = ConfigDict(
        validate_assignment=True,  # Validate on attribute assignment
        extra="forbid",  # Reject unknown fields
        json_schema_extra={
            "example": {
                "connection": {
                    "server": "https://secure.analytix.example",
                    "username": "jon.smith@example.com",
                    "password": None,
                    "timeout": 60,
                    "verify_ssl": True,
                    "retry": {
                        "max_attempts": 3,
                        "initial_delay": 1.0,
                        "backoff_multiplier": 2.0,
                        "jitter": 0.1,
                    },
                },
                "poll": {
                    "sleep_interval": 10,
                    "completion_code": 202,
                },
            }
        },
    )
