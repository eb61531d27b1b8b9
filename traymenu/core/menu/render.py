"""Depth-first renderer turning a typed menu tree into output lines."""

from __future__ import annotations

from typing import Iterator, Sequence

from ..errors import MenuDepthError
from .handles import encode_action, encode_menu
from .models import (
    MAX_MENU_DEPTH,
    FormattingConfig,
    ItemAddress,
    LineKind,
    MenuNode,
    MenuProperties,
    RenderedLine,
)


SEPARATOR_TYPE = "separator"
CHECKMARK_TOGGLE = "checkmark"


def sanitize_label(props: MenuProperties) -> str:
    """Drop the access-key marker (first underscore) from a label."""

    if not props.has_label:
        return ""
    return props.label.replace("_", "", 1)


def decorate_toggle(path: str, props: MenuProperties, fmt: FormattingConfig) -> str:
    if not props.toggle_type:
        return path
    if props.toggle_type == CHECKMARK_TOGGLE:
        glyph = fmt.checkmark_checked if props.toggle_state else fmt.checkmark_unchecked
        return f"{path} {glyph}"
    state = "on" if props.toggle_state else "off"
    return f"{path} [{props.toggle_type}:{state}]"


def _walk(
    nodes: Sequence[MenuNode],
    breadcrumb: tuple[str, ...],
    address: ItemAddress,
    fmt: FormattingConfig,
    depth: int,
) -> Iterator[RenderedLine]:
    if depth > MAX_MENU_DEPTH:
        raise MenuDepthError(f"Menu is nested deeper than {MAX_MENU_DEPTH} levels")

    for node in nodes:
        props = node.properties

        if not props.visible:
            continue

        if props.type == SEPARATOR_TYPE:
            yield RenderedLine(
                kind=LineKind.SEPARATOR,
                handle="",
                breadcrumb=breadcrumb,
                display=fmt.join_path((*breadcrumb, fmt.separator)),
            )
            continue

        if not props.has_label and not node.children:
            continue

        label = sanitize_label(props)

        if props.has_label:
            display = decorate_toggle(fmt.join_path((*breadcrumb, label)), props, fmt)
            if not props.enabled:
                display = f"<{display}>"

            if node.children:
                if fmt.show_parent:
                    yield RenderedLine(
                        kind=LineKind.SUBMENU,
                        handle=encode_menu(node.id, address),
                        breadcrumb=breadcrumb,
                        display=f"{display} {fmt.menu_indicator}",
                    )
            else:
                yield RenderedLine(
                    kind=LineKind.ACTION,
                    handle=encode_action(node.id, address),
                    breadcrumb=breadcrumb,
                    display=display,
                )

        if node.children and fmt.show_children:
            # Unlabelled grouping nodes are transparent.
            child_crumb = (*breadcrumb, label) if props.has_label else breadcrumb
            yield from _walk(node.children, child_crumb, address, fmt, depth + 1)


def render_menu(
    nodes: Sequence[MenuNode],
    breadcrumb: Sequence[str],
    address: ItemAddress,
    fmt: FormattingConfig,
) -> list[RenderedLine]:
    """Render `nodes` in pre-order.

    Hidden nodes prune their whole subtree, separators never recurse, and nodes
    without label or children produce nothing. Submenu lines are only emitted
    with `fmt.show_parent`, and descent only happens with `fmt.show_children`.
    """

    return list(_walk(nodes, tuple(breadcrumb), address, fmt, 0))
