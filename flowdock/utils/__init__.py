"""Utility modules for flowdock."""

from flowdock.utils.logging import get_logger, setup_logging
from flowdock.utils.platform import get_config_dir

__all__ = ["get_config_dir", "get_logger", "setup_logging"]
