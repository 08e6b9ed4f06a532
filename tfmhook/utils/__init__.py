"""Utility modules for tfmhook."""

from tfmhook.utils.logging import get_logger, setup_logging
from tfmhook.utils.platform import get_config_dir, get_platform, normalize_path

__all__ = [
    "get_logger",
    "setup_logging",
    "get_config_dir",
    "get_platform",
    "normalize_path",
]
