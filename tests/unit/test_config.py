"""
Unit tests for server configuration.
"""

import pytest

from spaserver.config import (
    DEFAULT_PORT,
    ConfigError,
    ServerConfig,
    parse_port,
)


class TestParsePort:
    """Tests for parse_port()."""

    def test_number(self):
        assert parse_port("8080") == 8080

    def test_missing_uses_default(self):
        assert parse_port(None) == DEFAULT_PORT == 80

    @pytest.mark.parametrize("value", ["eighty", "", "80.5", "8o8o"])
    def test_not_a_number_uses_default(self, value: str):
        """Test that unparsable ports silently fall back to 80."""
        assert parse_port(value) == 80

    def test_custom_default(self):
        assert parse_port("abc", default=3000) == 3000


class TestFromEnv:
    """Tests for ServerConfig.from_env()."""

    def test_minimal(self):
        """Test that APP_FOLDER alone is enough."""
        config = ServerConfig.from_env(environ={"APP_FOLDER": "/srv/app"})

        assert config.root_dir == "/srv/app"
        assert config.host == "127.0.0.1"
        assert config.port == 80
        assert config.buffer_size == 1024
        assert config.log_to_file is False
        assert config.log_file_path is None
        assert config.non_blocking is False

    def test_port_argument(self):
        config = ServerConfig.from_env(port=8080, environ={"APP_FOLDER": "/srv/app"})
        assert config.port == 8080

    def test_missing_app_folder(self):
        """Test that the root directory is required."""
        with pytest.raises(ConfigError, match="APP_FOLDER"):
            ServerConfig.from_env(environ={})

    def test_empty_app_folder(self):
        with pytest.raises(ConfigError, match="APP_FOLDER"):
            ServerConfig.from_env(environ={"APP_FOLDER": ""})

    def test_log_to_file(self, tmp_path):
        """Test that LOG_TO_FILE=true enables the file mirror."""
        log_file = str(tmp_path / "server.log")
        config = ServerConfig.from_env(environ={
            "APP_FOLDER": "/srv/app",
            "LOG_TO_FILE": "true",
            "LOG_FILE_PATH": log_file,
        })

        assert config.log_to_file is True
        assert config.log_file_path == log_file

    @pytest.mark.parametrize("value", ["TRUE", "True", "1", "yes", "false"])
    def test_log_to_file_only_exact_true(self, value: str):
        """Test that only the exact string "true" enables the file mirror."""
        config = ServerConfig.from_env(environ={
            "APP_FOLDER": "/srv/app",
            "LOG_TO_FILE": value,
        })
        assert config.log_to_file is False

    def test_log_to_file_requires_path(self):
        """Test that mirroring without a destination is rejected."""
        with pytest.raises(ConfigError, match="LOG_FILE_PATH"):
            ServerConfig.from_env(environ={
                "APP_FOLDER": "/srv/app",
                "LOG_TO_FILE": "true",
            })

    def test_log_level(self):
        config = ServerConfig.from_env(environ={
            "APP_FOLDER": "/srv/app",
            "LOG_LEVEL": "DEBUG",
        })
        assert config.log_level == "DEBUG"

    def test_non_blocking_accept(self):
        config = ServerConfig.from_env(environ={
            "APP_FOLDER": "/srv/app",
            "NON_BLOCKING_ACCEPT": "true",
        })
        assert config.non_blocking is True

    def test_reads_os_environ(self, monkeypatch):
        """Test that the process environment is used by default."""
        monkeypatch.setenv("APP_FOLDER", "/from/env")
        monkeypatch.delenv("LOG_TO_FILE", raising=False)

        assert ServerConfig.from_env().root_dir == "/from/env"


class TestValidate:
    """Tests for ServerConfig.validate()."""

    def test_valid(self):
        ServerConfig(root_dir="/srv/app", port=0).validate()

    @pytest.mark.parametrize("port", [-1, 65536, 100000])
    def test_invalid_port(self, port: int):
        with pytest.raises(ConfigError, match="Invalid port"):
            ServerConfig(root_dir="/srv/app", port=port).validate()

    def test_missing_root(self):
        with pytest.raises(ConfigError):
            ServerConfig().validate()

    def test_invalid_buffer_size(self):
        with pytest.raises(ConfigError):
            ServerConfig(root_dir="/srv/app", buffer_size=0).validate()

    def test_log_to_file_without_path(self):
        with pytest.raises(ConfigError):
            ServerConfig(root_dir="/srv/app", log_to_file=True).validate()
