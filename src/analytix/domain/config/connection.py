"""Connection configuration model."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from analytix.domain.config.retry import TransportRetryConfig


class ConnectionConfig(BaseModel):
    """Configuration for the platform connection.

    Attributes:
        server: Platform base URL (http or https)
        username: Login name (None = from ANALYTIX_USERNAME env)
        password: Password (None = from ANALYTIX_PASSWORD env)
        timeout: Per-request timeout in seconds
        verify_ssl: Verify TLS certificates
        login_path: Path of the login resource
        user_agent: Value of the User-Agent header
        retry: Transport retry configuration for network failures
    """

    server: str = "https://secure.analytix.example"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(60.0, gt=0.0)
    verify_ssl: bool = True
    login_path: str = "/gdc/account/login"
    user_agent: str = "analytix-python"
    retry: TransportRetryConfig = Field(default_factory=TransportRetryConfig)

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        """Require an absolute http(s) URL without trailing slash"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"server must be an http(s) URL, got '{v}'")
        return v.rstrip("/")
