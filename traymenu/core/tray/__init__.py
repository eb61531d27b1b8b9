"""Bus-facing side of tray menus: item registry and layout fetching."""

from __future__ import annotations

from .menus import fetch_item_layout, lines_for_handle, render_handle, tray_lines
from .registry import TrayRegistry

__all__ = ["TrayRegistry", "fetch_item_layout", "lines_for_handle", "render_handle", "tray_lines"]
