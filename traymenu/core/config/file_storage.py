from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def load_config_settings(*, config_file: Path, defaults: dict[str, Any], logger) -> dict[str, Any]:
    """Load config JSON merged over `defaults`.

    Returns a copy of `defaults` when the file does not exist, and also when it
    cannot be read or parsed (after logging a warning).
    """

    if not config_file.exists():
        return dict(defaults)

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load config from %s: %s", config_file, e)
        return dict(defaults)

    if not isinstance(loaded, dict):
        logger.warning("Ignoring config %s: top level is not an object", config_file)
        return dict(defaults)

    return {**defaults, **loaded}
