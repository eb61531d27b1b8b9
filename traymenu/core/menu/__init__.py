"""Menu layout model, handle codec and renderer.

Everything in this package is pure: no bus access, no config files.
"""

from __future__ import annotations

from .handles import Handle, decode_handle, encode_action, encode_menu, encode_tray, split_item_address
from .layout import convert_layout, convert_node, convert_nodes
from .models import (
    MAX_MENU_DEPTH,
    FormattingConfig,
    ItemAddress,
    LineKind,
    MenuNode,
    MenuProperties,
    RawLayout,
    RawMenuNode,
    RenderedLine,
    TrayItem,
)
from .properties import resolve_properties
from .render import render_menu, sanitize_label


__all__ = [
    "MAX_MENU_DEPTH",
    "FormattingConfig",
    "Handle",
    "ItemAddress",
    "LineKind",
    "MenuNode",
    "MenuProperties",
    "RawLayout",
    "RawMenuNode",
    "RenderedLine",
    "TrayItem",
    "convert_layout",
    "convert_node",
    "convert_nodes",
    "decode_handle",
    "encode_action",
    "encode_menu",
    "encode_tray",
    "render_menu",
    "resolve_properties",
    "sanitize_label",
    "split_item_address",
]
