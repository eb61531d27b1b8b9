"""traymenu Config implementation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ..dbus.busctl import MAX_TIMEOUT_S, MIN_TIMEOUT_S
from ..menu.models import FormattingConfig
from ._props import bool_prop, choice_prop, float_prop, str_prop
from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_config_settings

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def config_file_path() -> Path:
    """Return the file `Config()` reads when no path is given.

    TRAYMENU_CONFIG_PATH names the file directly. Otherwise config.json is
    looked up in TRAYMENU_CONFIG_DIR, falling back to the XDG user config
    directory. A relative XDG_CONFIG_HOME is ignored, as the XDG base
    directory rules require.
    """

    explicit = os.environ.get("TRAYMENU_CONFIG_PATH")
    if explicit:
        return Path(explicit).expanduser()

    override_dir = os.environ.get("TRAYMENU_CONFIG_DIR")
    if override_dir:
        return Path(override_dir).expanduser() / CONFIG_FILE_NAME

    xdg = Path(os.environ.get("XDG_CONFIG_HOME") or "")
    base = xdg if xdg.is_absolute() else Path.home() / ".config"
    return base / "traymenu" / CONFIG_FILE_NAME


class Config:
    """Read-only configuration for traymenu.

    Values of the wrong type in config.json fall back to their defaults.
    """

    DEFAULTS = _DEFAULTS

    def __init__(self, path: Optional[Path] = None):
        # Resolved at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_FILE = Path(path) if path is not None else config_file_path()
        self._settings = load_config_settings(
            config_file=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            logger=logger,
        )

    checkmark_checked = str_prop("checkmark_checked", default=_DEFAULTS["checkmark_checked"])
    checkmark_unchecked = str_prop("checkmark_unchecked", default=_DEFAULTS["checkmark_unchecked"])
    menu_indicator = str_prop("menu_indicator", default=_DEFAULTS["menu_indicator"])
    menu_separator = str_prop("menu_separator", default=_DEFAULTS["menu_separator"])
    separator = str_prop("separator", default=_DEFAULTS["separator"])
    show_children = bool_prop("show_children", default=_DEFAULTS["show_children"])
    show_parent = bool_prop("show_parent", default=_DEFAULTS["show_parent"])
    timeout_s = float_prop("timeout_s", default=_DEFAULTS["timeout_s"], min_v=MIN_TIMEOUT_S, max_v=MAX_TIMEOUT_S)
    bus = choice_prop("bus", default=_DEFAULTS["bus"], choices=("user", "system"))

    @property
    def names(self) -> dict[str, str]:
        raw = self._settings.get("names")
        if not isinstance(raw, dict):
            return {}
        # Non-string display names are ignored rather than coerced.
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def formatting(self) -> FormattingConfig:
        return FormattingConfig(
            checkmark_checked=self.checkmark_checked,
            checkmark_unchecked=self.checkmark_unchecked,
            menu_indicator=self.menu_indicator,
            menu_separator=self.menu_separator,
            separator=self.separator,
            show_children=self.show_children,
            show_parent=self.show_parent,
            names=self.names,
        )
