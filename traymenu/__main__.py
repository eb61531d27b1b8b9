"""Run the CLI as `python -m traymenu`; same behaviour as the console script."""

from __future__ import annotations

import sys

from .app.entrypoint import main


if __name__ == "__main__":
    sys.exit(main())
