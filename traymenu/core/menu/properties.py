"""Typed view of a dbusmenu property bag.

Applications put whatever they like into the `a{sv}` property map. Unknown keys
are ignored, and known keys carrying a value of the wrong type are treated as
absent so a sloppy menu never breaks rendering.
"""

from __future__ import annotations

from typing import Any, Mapping

from .models import MenuProperties


def _str_value(bag: Mapping[str, Any], key: str) -> str | None:
    v = bag.get(key)
    return v if isinstance(v, str) else None


def _bool_value(bag: Mapping[str, Any], key: str) -> bool | None:
    v = bag.get(key)
    return v if isinstance(v, bool) else None


def _toggle_state(bag: Mapping[str, Any]) -> bool | None:
    # dbusmenu sends an int: 0 = off, 1 = on, -1 = indeterminate.
    v = bag.get("toggle-state")
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return v == 1
    return None


def resolve_properties(bag: Mapping[str, Any] | None) -> MenuProperties:
    if not isinstance(bag, Mapping):
        return MenuProperties()

    kwargs: dict[str, Any] = {}

    node_type = _str_value(bag, "type")
    if node_type is not None:
        kwargs["type"] = node_type

    enabled = _bool_value(bag, "enabled")
    if enabled is not None:
        kwargs["enabled"] = enabled

    visible = _bool_value(bag, "visible")
    if visible is not None:
        kwargs["visible"] = visible

    label = _str_value(bag, "label")
    if label is not None:
        kwargs["label"] = label
        kwargs["has_label"] = True

    toggle_type = _str_value(bag, "toggle-type")
    if toggle_type is not None:
        kwargs["toggle_type"] = toggle_type

    toggle_state = _toggle_state(bag)
    if toggle_state is not None:
        kwargs["toggle_state"] = toggle_state

    return MenuProperties(**kwargs)
