"""Tests for settings loading."""

import sys

import pytest

from flowdock.config import DEFAULT_API_URL, DEFAULT_STREAM_URL, Settings, StreamConfig, load_settings
from flowdock.utils.platform import get_config_dir


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("FLOWDOCK_API_TOKEN", "FLOWDOCK_CONFIG", "FLOWDOCK_STREAM__MAX_RETRIES", "FLOWDOCK_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FLOWDOCK_CONFIG_DIR", str(tmp_path / "no-config"))


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.api_url == DEFAULT_API_URL
        assert settings.stream_url == DEFAULT_STREAM_URL
        assert settings.api_token == ""
        assert settings.stream.retry_interval == 3.0
        assert settings.stream.max_retries == 5
        assert settings.stream.on_decode_error == "terminate"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FLOWDOCK_API_TOKEN", "env-token")
        monkeypatch.setenv("FLOWDOCK_STREAM__MAX_RETRIES", "9")
        settings = Settings()
        assert settings.api_token == "env-token"
        assert settings.stream.max_retries == 9

    def test_rejects_unknown_policy(self):
        with pytest.raises(ValueError):
            StreamConfig(on_decode_error="ignore")


class TestLoadSettings:
    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "api_token: yaml-token\n"
            "timeout: 5\n"
            "stream:\n"
            "  retry_interval: 0.5\n"
            "  on_decode_error: skip\n"
        )
        settings = load_settings(path)
        assert settings.api_token == "yaml-token"
        assert settings.timeout == 5
        assert settings.stream.retry_interval == 0.5
        assert settings.stream.on_decode_error == "skip"

    def test_config_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("log_level: DEBUG\n")
        monkeypatch.setenv("FLOWDOCK_CONFIG", str(path))
        assert load_settings().log_level == "DEBUG"

    def test_default_config_dir(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "cfg"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("log_json: true\n")
        monkeypatch.setenv("FLOWDOCK_CONFIG_DIR", str(config_dir))
        assert load_settings().log_json is True

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.yaml")
        assert settings.api_url == DEFAULT_API_URL

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_settings(path).timeout == 30.0


class TestConfigDir:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FLOWDOCK_CONFIG_DIR", str(tmp_path))
        assert get_config_dir() == tmp_path

    def test_xdg_on_linux(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FLOWDOCK_CONFIG_DIR")
        monkeypatch.setattr(sys, "platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "flowdock"

    def test_application_support_on_macos(self, monkeypatch):
        monkeypatch.delenv("FLOWDOCK_CONFIG_DIR")
        monkeypatch.setattr(sys, "platform", "darwin")
        assert get_config_dir().parts[-3:] == ("Library", "Application Support", "flowdock")
