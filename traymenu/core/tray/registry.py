from __future__ import annotations

import logging
from typing import Any

from ..errors import AppNotFoundError, BusCallError, BusReplyError, HandleError
from ..menu.handles import split_item_address
from ..menu.models import ItemAddress, TrayItem


logger = logging.getLogger(__name__)


WATCHER_BUS_NAME = "org.kde.StatusNotifierWatcher"
WATCHER_OBJECT_PATH = "/StatusNotifierWatcher"
WATCHER_INTERFACE = "org.kde.StatusNotifierWatcher"
ITEM_INTERFACE = "org.kde.StatusNotifierItem"


class TrayRegistry:
    """Read-only view of the StatusNotifierWatcher registrations.

    Nothing is cached; every call asks the watcher again.
    """

    def __init__(self, bus: Any):
        self.bus = bus

    def registered_items(self) -> list[str]:
        """Return the raw `<bus_name>/<path>` strings known to the watcher."""

        try:
            value = self.bus.get_property(
                WATCHER_BUS_NAME,
                WATCHER_OBJECT_PATH,
                WATCHER_INTERFACE,
                "RegisteredStatusNotifierItems",
            )
        except BusCallError as exc:
            raise type(exc)(f"Failed to retrieve systray items: {exc}") from exc

        if not isinstance(value, list):
            raise BusReplyError(f"Unexpected RegisteredStatusNotifierItems value: {value!r}")
        return [str(v) for v in value]

    def app_id(self, address: ItemAddress) -> str:
        value = self.bus.get_property(address.bus_name, address.object_path, ITEM_INTERFACE, "Id")
        if not isinstance(value, str):
            raise BusReplyError(f"Unrecognized Id type for {address}")
        return value

    def _resolve(self, item: str) -> TrayItem | None:
        try:
            address = split_item_address(item)
            return TrayItem(address=address, app_id=self.app_id(address))
        except (BusCallError, HandleError) as exc:
            # The app may have quit between enumeration and this call.
            logger.debug("Skipping tray item %s: %s", item, exc)
            return None

    def list_items(self) -> list[TrayItem]:
        out: list[TrayItem] = []
        for item in self.registered_items():
            resolved = self._resolve(item)
            if resolved is not None:
                out.append(resolved)
        return out

    def resolve_by_app_id(self, app_id: str) -> ItemAddress:
        for item in self.registered_items():
            resolved = self._resolve(item)
            if resolved is not None and resolved.app_id == app_id:
                return resolved.address
        raise AppNotFoundError(app_id)
