from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


# Trees deeper than this are treated as a malformed (or cyclic) upstream snapshot.
MAX_MENU_DEPTH = 64


@dataclass(frozen=True)
class ItemAddress:
    """Bus name plus object path of a registered tray item.

    The text form matches what StatusNotifierWatcher hands out:
    `<bus_name>/<path-suffix>`, e.g. `:1.52/StatusNotifierItem`.
    """

    bus_name: str
    object_path: str

    def __str__(self) -> str:
        return f"{self.bus_name}{self.object_path}"


@dataclass(frozen=True)
class TrayItem:
    address: ItemAddress
    app_id: str


@dataclass(frozen=True)
class RawMenuNode:
    id: int
    properties: Mapping[str, Any] = field(default_factory=dict)
    children: tuple["RawMenuNode", ...] = ()


@dataclass(frozen=True)
class RawLayout:
    """One GetLayout snapshot.

    `root.children` are the top-level menu entries; `root.properties` holds the
    root properties (usually just `children-display`).
    """

    revision: int
    root: RawMenuNode

    @property
    def items(self) -> tuple[RawMenuNode, ...]:
        return self.root.children


@dataclass(frozen=True)
class MenuProperties:
    type: str = ""
    enabled: bool = True
    visible: bool = True
    label: str = ""
    has_label: bool = False
    toggle_type: str = ""
    toggle_state: bool = False


@dataclass(frozen=True)
class MenuNode:
    id: int
    properties: MenuProperties
    children: tuple["MenuNode", ...] = ()


@dataclass(frozen=True)
class FormattingConfig:
    checkmark_checked: str = "[x]"
    checkmark_unchecked: str = "[ ]"
    menu_indicator: str = ">"
    menu_separator: str = ">"
    separator: str = "---"
    show_children: bool = True
    show_parent: bool = False
    names: Mapping[str, str] = field(default_factory=dict)

    def display_name(self, app_id: str) -> str:
        return self.names.get(app_id, app_id)

    def join_path(self, parts) -> str:
        return f" {self.menu_separator} ".join(parts)


class LineKind(str, Enum):
    SEPARATOR = "separator"
    SUBMENU = "submenu"
    ACTION = "action"
    TRAY = "tray"


@dataclass(frozen=True)
class RenderedLine:
    kind: LineKind
    handle: str
    breadcrumb: tuple[str, ...]
    display: str

    def format(self) -> str:
        """Return the `<meta>\\t<display>` output line."""

        meta = "-" if self.kind is LineKind.SEPARATOR else self.handle
        return f"{meta}\t{self.display}"
