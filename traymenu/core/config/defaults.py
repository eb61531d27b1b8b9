"""Default configuration values."""

from __future__ import annotations

DEFAULTS: dict = {
    # Toggle decoration for "checkmark" entries.
    "checkmark_checked": "[x]",
    "checkmark_unchecked": "[ ]",
    # Appended to submenu lines.
    "menu_indicator": ">",
    # Joins breadcrumb parts: "File > Open".
    "menu_separator": ">",
    # Shown in place of a label for separator entries.
    "separator": "---",
    # Descend into submenus when rendering.
    "show_children": True,
    # Emit a navigable line for each submenu itself.
    "show_parent": False,
    # App id -> display name for the tray listing.
    "names": {},
    # Per remote call, in seconds.
    "timeout_s": 1.0,
    # 'user' (session bus) | 'system'
    "bus": "user",
}
