from __future__ import annotations

import logging
import os


def configure_logging(debug: bool = False) -> None:
    """Configure root logging for the CLI.

    Logs go to stderr; stdout carries only menu lines. If callers already
    configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if (debug or os.environ.get("TRAYMENU_DEBUG")) else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
