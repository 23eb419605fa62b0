"""Process-level registry of the current client.

Replaces an implicit global: the registry is an ordinary object with explicit
``connect``/``disconnect``. A default instance backs the package-level
``analytix.connect`` helpers; tests create their own.
"""

import logging
from typing import Any, Mapping, Optional, Union

from analytix.application.client import Client
from analytix.domain.config.app import AppConfig
from analytix.errors import AnalytixError

logger = logging.getLogger(__name__)


class ClientRegistry:
    """Holds at most one connected client"""

    def __init__(self):
        self._client: Optional[Client] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def current(self) -> Client:
        """Currently registered client

        Raises:
            AnalytixError: If nothing is connected
        """
        if self._client is None:
            raise AnalytixError("Not connected. Call connect() first.")
        return self._client

    def connect(
        self,
        username: Union[str, Mapping[str, str], None] = None,
        password: Optional[str] = None,
        config: Optional[AppConfig] = None,
        **kwargs: Any,
    ) -> Client:
        """Create a client, log in and register it as current

        Args:
            username: Login, or a mapping with ``login`` and ``password``
            password: Password
            config: Base configuration (credentials above take precedence)
            **kwargs: Passed to Client (connection, sleep, ...)

        Returns:
            Connected client
        """
        if isinstance(username, Mapping):
            password = username.get("password")
            username = username.get("login")

        config = (config or AppConfig()).model_copy(deep=True)
        if username is not None:
            config.connection.username = username
        if password is not None:
            config.connection.password = password

        client = Client(config, **kwargs)
        if self._client is not None:
            logger.info("Replacing previously connected client")
            self.disconnect()
        self._client = client
        return client

    def disconnect(self) -> None:
        """Disconnect and forget the current client (no-op if none)"""
        if self._client is not None:
            client, self._client = self._client, None
            client.disconnect()


default_registry = ClientRegistry()
