"""Per-OS locations for the client's config file."""

from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "flowdock"


def get_config_dir() -> Path:
    """Directory holding ``config.yaml``; ``FLOWDOCK_CONFIG_DIR`` wins."""
    env = os.environ.get("FLOWDOCK_CONFIG_DIR")
    if env:
        return Path(env)

    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")) / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / APP_NAME
