"""Handle strings used to navigate between separate invocations.

Each run is stateless: the first tab-separated token of a previous output line
is the only navigation input of the next run, so a handle must carry the whole
path to what it names.

    tray|<address>           root menu of a tray item
    menu|<id>|<address>      submenu owned by node <id>
    action|<id>|<address>    leaf entry (informational)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import HandleError
from .models import ItemAddress


TRAY = "tray"
MENU = "menu"
ACTION = "action"

_DELIMITER = "|"
_ARITY = {TRAY: 2, MENU: 3, ACTION: 3}

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Handle:
    kind: str
    address: ItemAddress
    node_id: Optional[int] = None

    def encode(self) -> str:
        if self.kind == TRAY:
            return encode_tray(self.address)
        if self.kind == MENU:
            return encode_menu(self.node_id, self.address)
        return encode_action(self.node_id, self.address)


def split_item_address(item: str) -> ItemAddress:
    """Split `<bus_name>/<path-suffix>` on the first slash."""

    bus_name, sep, suffix = str(item).partition("/")
    if not sep or not bus_name:
        raise HandleError(f"Invalid address: {item}")
    return ItemAddress(bus_name=bus_name, object_path="/" + suffix)


def encode_tray(address: ItemAddress) -> str:
    return f"{TRAY}{_DELIMITER}{address}"


def encode_menu(node_id: int, address: ItemAddress) -> str:
    return f"{MENU}{_DELIMITER}{node_id}{_DELIMITER}{address}"


def encode_action(node_id: int, address: ItemAddress) -> str:
    return f"{ACTION}{_DELIMITER}{node_id}{_DELIMITER}{address}"


def _parse_node_id(raw: str, text: str) -> int:
    try:
        node_id = int(raw)
    except ValueError:
        raise HandleError(f"Invalid menu id {raw!r} in handle: {text}") from None
    if not _INT32_MIN <= node_id <= _INT32_MAX:
        raise HandleError(f"Menu id out of range in handle: {text}")
    return node_id


def decode_handle(text: str) -> Handle:
    parts = str(text).strip().split(_DELIMITER)
    tag = parts[0]

    arity = _ARITY.get(tag)
    if arity is None:
        raise HandleError(f"Unknown handle type {tag!r}: {text}")
    if len(parts) != arity:
        raise HandleError(f"Malformed {tag} handle: {text}")

    address = split_item_address(parts[-1])
    if tag == TRAY:
        return Handle(kind=TRAY, address=address)

    return Handle(kind=tag, address=address, node_id=_parse_node_id(parts[1], text))
