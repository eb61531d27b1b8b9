"""Command-line application.

`entrypoint.main` owns startup (logging, config, bus check) and dispatches to
the listing or menu rendering commands.
"""

from .entrypoint import main

__all__ = ["main"]
