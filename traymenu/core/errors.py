"""Exception types shared by the transport, registry and menu layers."""

from __future__ import annotations


class TrayMenuError(RuntimeError):
    pass


class BusUnavailableError(TrayMenuError):
    """busctl is missing or the message bus cannot be reached."""


class BusCallError(TrayMenuError):
    pass


class BusTimeoutError(BusCallError):
    pass


class BusReplyError(BusCallError):
    """The reply decoded fine but does not have the expected shape."""


class HandleError(TrayMenuError, ValueError):
    pass


class AppNotFoundError(TrayMenuError):
    def __init__(self, app_id: str):
        super().__init__(f"Application not found: {app_id}")
        self.app_id = app_id


class MenuNodeNotFoundError(TrayMenuError):
    def __init__(self, node_id: int, address: str):
        super().__init__(f"Menu entry {node_id} not found in {address} (menu changed?)")
        self.node_id = node_id
        self.address = address


class MenuDepthError(TrayMenuError):
    pass
