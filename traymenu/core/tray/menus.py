"""Fetch dbusmenu layouts and turn them into output lines.

The fetch helpers talk to the bus; `lines_for_handle` and `tray_lines` are pure
so a whole navigation step can be tested from a canned layout.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from ..dbus.busctl import unwrap_variant
from ..errors import BusCallError, BusReplyError, HandleError, MenuDepthError, MenuNodeNotFoundError
from ..menu import handles
from ..menu.handles import Handle
from ..menu.layout import convert_layout
from ..menu.models import (
    MAX_MENU_DEPTH,
    FormattingConfig,
    ItemAddress,
    LineKind,
    MenuNode,
    RawLayout,
    RawMenuNode,
    RenderedLine,
    TrayItem,
)
from ..menu.render import SEPARATOR_TYPE, render_menu, sanitize_label
from .registry import ITEM_INTERFACE


logger = logging.getLogger(__name__)


DBUSMENU_INTERFACE = "com.canonical.dbusmenu"


def fetch_menu_path(bus: Any, address: ItemAddress) -> str:
    value = bus.get_property(address.bus_name, address.object_path, ITEM_INTERFACE, "Menu")
    if not isinstance(value, str) or not value.startswith("/"):
        raise BusReplyError(f"{address} does not export a menu (Menu={value!r})")
    return value


def about_to_show(bus: Any, bus_name: str, menu_path: str, node_id: int = 0) -> None:
    """Tell the app a menu is about to be shown.

    Some apps only populate submenus after this call. It is optional in the
    dbusmenu protocol, so failures are only logged.
    """

    try:
        bus.call(bus_name, menu_path, DBUSMENU_INTERFACE, "AboutToShow", "i", node_id)
    except BusCallError as exc:
        logger.debug("AboutToShow(%s) failed on %s%s: %s", node_id, bus_name, menu_path, exc)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def parse_raw_node(value: Any, *, _depth: int = 0) -> RawMenuNode:
    """Build a RawMenuNode from busctl's JSON for `(ia{sv}av)`."""

    if _depth > MAX_MENU_DEPTH:
        raise MenuDepthError(f"Menu layout is nested deeper than {MAX_MENU_DEPTH} levels")

    value = unwrap_variant(value)
    if not isinstance(value, list) or len(value) != 3:
        raise BusReplyError(f"Unexpected menu node: {value!r}")

    node_id, props, children = value
    if not _is_int(node_id):
        raise BusReplyError(f"Unexpected menu node id: {node_id!r}")
    if not isinstance(props, dict):
        props = {}
    if not isinstance(children, list):
        raise BusReplyError(f"Unexpected children of menu node {node_id}: {children!r}")

    return RawMenuNode(
        id=node_id,
        properties={str(k): unwrap_variant(v) for k, v in props.items()},
        children=tuple(parse_raw_node(child, _depth=_depth + 1) for child in children),
    )


def parse_layout_reply(reply: Sequence[Any]) -> RawLayout:
    if len(reply) != 2 or not _is_int(reply[0]):
        raise BusReplyError(f"Unexpected GetLayout reply: {reply!r}")
    return RawLayout(revision=reply[0], root=parse_raw_node(reply[1]))


def fetch_layout(bus: Any, bus_name: str, menu_path: str, parent_id: int = 0) -> RawLayout:
    # GetLayout(parentId, recursionDepth=-1 for everything, propertyNames=[] for all)
    reply = bus.call(bus_name, menu_path, DBUSMENU_INTERFACE, "GetLayout", "iias", parent_id, -1, 0)
    return parse_layout_reply(reply)


def fetch_item_layout(bus: Any, address: ItemAddress) -> RawLayout:
    menu_path = fetch_menu_path(bus, address)
    about_to_show(bus, address.bus_name, menu_path)
    layout = fetch_layout(bus, address.bus_name, menu_path)
    logger.debug("Fetched layout revision %s from %s%s", layout.revision, address.bus_name, menu_path)
    return layout


def find_node(
    nodes: Iterable[MenuNode],
    node_id: int,
    breadcrumb: tuple[str, ...] = (),
    *,
    _depth: int = 0,
) -> Optional[tuple[MenuNode, tuple[str, ...]]]:
    """Locate `node_id` and return it with its breadcrumb.

    The breadcrumb holds the labels of labelled ancestors plus the node itself,
    matching what the renderer would use for its children. Only nodes the
    renderer could have emitted a handle for are reachable: hidden subtrees
    and separators are never matched or searched.
    """

    if _depth > MAX_MENU_DEPTH:
        raise MenuDepthError(f"Menu is nested deeper than {MAX_MENU_DEPTH} levels")

    for node in nodes:
        if not node.properties.visible or node.properties.type == SEPARATOR_TYPE:
            continue
        crumb = (*breadcrumb, sanitize_label(node.properties)) if node.properties.has_label else breadcrumb
        if node.id == node_id:
            return node, crumb
        found = find_node(node.children, node_id, crumb, _depth=_depth + 1)
        if found is not None:
            return found
    return None


def lines_for_handle(handle: Handle, layout: RawLayout, fmt: FormattingConfig) -> list[RenderedLine]:
    nodes = convert_layout(layout)

    if handle.kind == handles.TRAY:
        return render_menu(nodes, (), handle.address, fmt)

    if handle.kind == handles.MENU:
        found = find_node(nodes, handle.node_id)
        if found is None:
            raise MenuNodeNotFoundError(handle.node_id, str(handle.address))
        node, crumb = found
        return render_menu(node.children, crumb, handle.address, fmt)

    raise HandleError(f"{handle.kind} handles cannot be opened: {handle.encode()}")


def render_handle(bus: Any, handle: Handle, fmt: FormattingConfig) -> list[RenderedLine]:
    """Fetch a fresh layout for `handle` and render it."""

    if handle.kind not in (handles.TRAY, handles.MENU):
        raise HandleError(f"{handle.kind} handles cannot be opened: {handle.encode()}")
    return lines_for_handle(handle, fetch_item_layout(bus, handle.address), fmt)


def tray_lines(items: Iterable[TrayItem], fmt: FormattingConfig) -> list[RenderedLine]:
    return [
        RenderedLine(
            kind=LineKind.TRAY,
            handle=handles.encode_tray(item.address),
            breadcrumb=(),
            display=fmt.display_name(item.app_id),
        )
        for item in items
    ]
