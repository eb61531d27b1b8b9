"""CLI entrypoint.

    traymenu                          list tray items
    traymenu 'tray|:1.52/StatusNotifierItem'
    traymenu 'menu|17|:1.52/StatusNotifierItem'
    traymenu --app nm-applet

Each output line is `<handle>\\t<text>`; feed the handle of a line back in to
open what it names.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, Optional, TextIO

from traymenu import __version__
from traymenu.core.config import Config
from traymenu.core.dbus import Busctl
from traymenu.core.errors import HandleError, TrayMenuError
from traymenu.core.menu import handles
from traymenu.core.menu.handles import Handle, decode_handle
from traymenu.core.menu.models import FormattingConfig, RenderedLine
from traymenu.core.tray import TrayRegistry, render_handle, tray_lines

from .startup import configure_logging

logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traymenu",
        description="List system tray items and print their menus as text.",
    )
    parser.add_argument(
        "handle",
        nargs="?",
        help="tray|<address> or menu|<id>|<address> from a previous run; omit to list tray items",
    )
    parser.add_argument("--app", metavar="ID", help="Print the menu of the tray item with this application id")
    parser.add_argument("--config", type=Path, metavar="PATH", help="Config file (default: ~/.config/traymenu/config.json)")
    parser.add_argument("--timeout", type=float, metavar="SECONDS", help="Timeout for each D-Bus call")
    parser.add_argument("--system", action="store_true", help="Talk to the system bus instead of the session bus")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _emit(lines: Iterable[RenderedLine], out: TextIO) -> None:
    for line in lines:
        out.write(line.format() + "\n")
    out.flush()


def run(args: argparse.Namespace, *, bus: Any, fmt: FormattingConfig, out: TextIO) -> int:
    """Execute one invocation against an already connected bus."""

    registry = TrayRegistry(bus)

    if args.app:
        handle = Handle(kind=handles.TRAY, address=registry.resolve_by_app_id(args.app))
    elif args.handle:
        try:
            handle = decode_handle(args.handle)
        except HandleError as exc:
            logger.error("%s", exc)
            return EXIT_USAGE
        if handle.kind == handles.ACTION:
            logger.error("Action entries cannot be opened: %s", args.handle)
            return EXIT_USAGE
    else:
        _emit(tray_lines(registry.list_items(), fmt), out)
        return EXIT_OK

    _emit(render_handle(bus, handle, fmt), out)
    return EXIT_OK


def main(argv: Optional[Iterable[str]] = None, *, out: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.app and args.handle:
        parser.error("pass either a handle or --app, not both")
    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    out = out if out is not None else sys.stdout

    try:
        configure_logging(args.debug)

        cfg = Config(args.config)
        bus = Busctl(
            bus="system" if args.system else cfg.bus,
            timeout_s=args.timeout if args.timeout is not None else cfg.timeout_s,
        )
        bus.ping()

        return run(args, bus=bus, fmt=cfg.formatting(), out=out)

    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except TrayMenuError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR
