"""Tests for ClientRegistry and package-level connect helpers"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import analytix
from analytix.application.registry import ClientRegistry
from analytix.domain.config.app import AppConfig
from analytix.domain.config.connection import ConnectionConfig
from analytix.errors import AnalytixError


class TestClientRegistry:
    """Tests for explicit connect/disconnect lifecycle"""

    def test_connect_registers_client(self):
        registry = ClientRegistry()
        connection = MagicMock()

        client = registry.connect("jon", "pw", connection=connection)

        assert registry.current is client
        assert registry.is_connected
        connection.connect.assert_called_once_with("jon", "pw")

    def test_connect_with_mapping(self):
        registry = ClientRegistry()
        connection = MagicMock()

        client = registry.connect({"login": "jon", "password": "pw"}, connection=connection)

        assert client.config.connection.username == "jon"
        connection.connect.assert_called_once_with("jon", "pw")

    def test_connect_does_not_mutate_given_config(self):
        config = AppConfig(connection=ConnectionConfig(username="base"))
        ClientRegistry().connect("other", "pw", config=config, connection=MagicMock())
        assert config.connection.username == "base"

    def test_current_without_connect_raises(self):
        with pytest.raises(AnalytixError, match="Not connected"):
            ClientRegistry().current

    def test_disconnect_clears_current(self):
        registry = ClientRegistry()
        connection = MagicMock()
        registry.connect("jon", "pw", connection=connection)

        registry.disconnect()

        connection.disconnect.assert_called_once()
        assert not registry.is_connected

    def test_disconnect_without_client_is_noop(self):
        ClientRegistry().disconnect()

    def test_reconnect_replaces_previous_client(self):
        registry = ClientRegistry()
        first, second = MagicMock(), MagicMock()
        registry.connect("a", "pw", connection=first)

        client = registry.connect("b", "pw", connection=second)

        first.disconnect.assert_called_once()
        assert registry.current is client

    def test_registries_are_independent(self):
        a, b = ClientRegistry(), ClientRegistry()
        a.connect("jon", "pw", connection=MagicMock())
        assert not b.is_connected


class TestDefaultRegistry:
    """Tests for analytix.connect / disconnect / current_client"""

    def test_package_helpers(self):
        connection = MagicMock()
        try:
            client = analytix.connect("jon", "pw", connection=connection)
            assert analytix.current_client() is client
        finally:
            analytix.disconnect()
        with pytest.raises(AnalytixError):
            analytix.current_client()
