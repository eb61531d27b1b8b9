from __future__ import annotations

from typing import Iterable

from ..errors import MenuDepthError
from .models import MAX_MENU_DEPTH, MenuNode, RawLayout, RawMenuNode
from .properties import resolve_properties


def convert_node(raw: RawMenuNode, *, _depth: int = 0) -> MenuNode:
    """Convert one raw node and its subtree, keeping ids and sibling order."""

    if _depth > MAX_MENU_DEPTH:
        raise MenuDepthError(f"Menu layout is nested deeper than {MAX_MENU_DEPTH} levels (node {raw.id})")

    return MenuNode(
        id=raw.id,
        properties=resolve_properties(raw.properties),
        children=tuple(convert_node(child, _depth=_depth + 1) for child in raw.children),
    )


def convert_nodes(raws: Iterable[RawMenuNode]) -> tuple[MenuNode, ...]:
    return tuple(convert_node(raw, _depth=1) for raw in raws)


def convert_layout(layout: RawLayout) -> tuple[MenuNode, ...]:
    """Return the typed top-level entries of a layout snapshot."""

    return convert_nodes(layout.items)
