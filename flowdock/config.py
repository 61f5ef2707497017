"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from flowdock.utils.platform import get_config_dir


DEFAULT_API_URL = "https://api.flowdock.com/"
DEFAULT_STREAM_URL = "https://stream.flowdock.com/"


class StreamConfig(BaseModel):
    retry_interval: float = 3.0
    max_retries: int | None = 5  # consecutive failed connects; None retries forever
    on_decode_error: Literal["terminate", "skip"] = "terminate"


class Settings(BaseSettings):
    """Client defaults.

    The library never configures logging by itself; applications pass
    ``log_level`` and ``log_json`` to ``setup_logging()``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOWDOCK_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    api_url: str = DEFAULT_API_URL
    stream_url: str = DEFAULT_STREAM_URL
    api_token: str = ""
    timeout: float = 30.0
    user_agent: str = "flowdock-python/0.1.0"
    stream: StreamConfig = Field(default_factory=StreamConfig)
    log_level: str = "INFO"
    log_json: bool = False


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    if config_path is None:
        config_path = os.environ.get("FLOWDOCK_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # YAML values are init kwargs, which pydantic-settings ranks above env vars
    return Settings(**yaml_data)
