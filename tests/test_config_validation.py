"""Tests for configuration validation with Pydantic."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from analytix.domain.config import (
    AppConfig,
    ConnectionConfig,
    PollConfig,
    PollOptions,
    RetrySpec,
    TransportRetryConfig,
)
from analytix.errors import TransientServerError
from analytix.infrastructure.config.config_manager import ConfigManager, ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ANALYTIX_SERVER", "ANALYTIX_USERNAME", "ANALYTIX_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


class TestConnectionConfigValidation:
    """Tests for ConnectionConfig validation."""

    def test_server_trailing_slash_stripped(self):
        assert ConnectionConfig(server="https://a.example/").server == "https://a.example"

    def test_server_must_be_http(self):
        with pytest.raises(ValidationError, match="server"):
            ConnectionConfig(server="ftp://a.example")

    def test_timeout_positive(self):
        with pytest.raises(ValidationError, match="timeout"):
            ConnectionConfig(timeout=0)

    def test_transport_retry_bounds(self):
        with pytest.raises(ValidationError, match="max_attempts"):
            TransportRetryConfig(max_attempts=0)
        with pytest.raises(ValidationError, match="jitter"):
            TransportRetryConfig(jitter=1.5)


class TestPollOptionsValidation:
    """Tests for PollOptions defaults and validation."""

    def test_defaults(self):
        options = PollOptions()
        assert options.completion_code == 202
        assert options.sleep_interval == 10.0
        assert options.process is True
        assert options.retry.max_attempts == 3
        assert options.retry.on == (TransientServerError,)

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError, match="code"):
            PollOptions(code=200)

    def test_negative_interval_rejected(self):
        with pytest.raises(ValidationError, match="sleep_interval"):
            PollOptions(sleep_interval=-1)

    def test_retry_spec_defaults(self):
        spec = RetrySpec()
        assert spec.max_attempts == 1
        assert spec.on == (Exception,)

    def test_retry_spec_rejects_non_exception(self):
        with pytest.raises(ValidationError):
            RetrySpec(on=(int,))


class TestAppConfig:
    """Tests for AppConfig."""

    def test_extra_section_rejected(self):
        with pytest.raises(ValidationError):
            AppConfig(unknown={})

    def test_poll_config_bounds(self):
        with pytest.raises(ValidationError, match="completion_code"):
            PollConfig(completion_code=42)


class TestConfigManager:
    """Tests for ConfigManager."""

    def _write(self, tmp_path: Path, data) -> Path:
        path = tmp_path / ".analytix.yml"
        path.write_text(yaml.safe_dump(data))
        return path

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager()
        assert manager.get_poll_config().sleep_interval == 10

    def test_file_merged_over_defaults(self, tmp_path):
        path = self._write(tmp_path, {"connection": {"server": "https://x.example", "retry": {"max_attempts": 5}}})

        manager = ConfigManager(path)

        conn = manager.get_connection_config()
        assert conn.server == "https://x.example"
        assert conn.retry.max_attempts == 5
        assert conn.retry.backoff_multiplier == 2

    def test_file_found_in_parent(self, tmp_path, monkeypatch):
        self._write(tmp_path, {"poll": {"sleep_interval": 2}})
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)

        assert ConfigManager().get_poll_config().sleep_interval == 2

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = self._write(tmp_path, {"connection": {"username": "file-user"}})
        monkeypatch.setenv("ANALYTIX_USERNAME", "env-user")
        monkeypatch.setenv("ANALYTIX_PASSWORD", "env-pw")

        conn = ConfigManager(path).get_connection_config()

        assert conn.username == "env-user"
        assert conn.password == "env-pw"

    def test_invalid_value_raises_configuration_error(self, tmp_path):
        path = self._write(tmp_path, {"poll": {"sleep_interval": -5}})
        with pytest.raises(ConfigurationError, match="poll.sleep_interval"):
            ConfigManager(path)

    def test_unknown_section_raises_configuration_error(self, tmp_path):
        path = self._write(tmp_path, {"llm": {"provider": "x"}})
        with pytest.raises(ConfigurationError, match="llm"):
            ConfigManager(path)

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / ".analytix.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(path)

    def test_dotted_get(self, tmp_path):
        path = self._write(tmp_path, {"connection": {"server": "https://x.example"}})
        manager = ConfigManager(path)
        assert manager.get("connection.server") == "https://x.example"
        assert manager.get("connection.nothing", "d") == "d"
