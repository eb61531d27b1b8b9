"""traymenu configuration.

This package groups the config manager and related helpers.
"""

from __future__ import annotations

from .config import Config, config_file_path
from .file_storage import load_config_settings


__all__ = [
    "Config",
    "config_file_path",
    "load_config_settings",
]
