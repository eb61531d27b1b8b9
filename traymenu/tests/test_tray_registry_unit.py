from __future__ import annotations

import pytest

from traymenu.core.errors import AppNotFoundError, BusCallError, BusReplyError, BusTimeoutError
from traymenu.core.menu.models import ItemAddress, TrayItem
from traymenu.core.tray.registry import (
    ITEM_INTERFACE,
    WATCHER_BUS_NAME,
    WATCHER_INTERFACE,
    WATCHER_OBJECT_PATH,
    TrayRegistry,
)


WATCHER_KEY = (WATCHER_BUS_NAME, WATCHER_OBJECT_PATH, WATCHER_INTERFACE, "RegisteredStatusNotifierItems")


def _id_key(bus_name: str, path: str = "/StatusNotifierItem"):
    return (bus_name, path, ITEM_INTERFACE, "Id")


def test_list_items_resolves_ids_in_order(fake_bus_factory) -> None:
    bus = fake_bus_factory(
        properties={
            WATCHER_KEY: [":1.52/StatusNotifierItem", ":1.98/org/ayatana/NotificationItem/nm_applet"],
            _id_key(":1.52"): "steam",
            _id_key(":1.98", "/org/ayatana/NotificationItem/nm_applet"): "nm-applet",
        }
    )

    items = TrayRegistry(bus).list_items()

    assert items == [
        TrayItem(address=ItemAddress(":1.52", "/StatusNotifierItem"), app_id="steam"),
        TrayItem(address=ItemAddress(":1.98", "/org/ayatana/NotificationItem/nm_applet"), app_id="nm-applet"),
    ]


def test_list_items_skips_items_whose_id_fails(fake_bus_factory) -> None:
    bus = fake_bus_factory(
        properties={
            WATCHER_KEY: [":1.52/StatusNotifierItem", ":1.60/StatusNotifierItem"],
            _id_key(":1.52"): BusCallError("The name :1.52 was not provided by any .service files"),
            _id_key(":1.60"): "discord",
        }
    )

    items = TrayRegistry(bus).list_items()

    assert [i.app_id for i in items] == ["discord"]


@pytest.mark.parametrize(
    "failure",
    [
        BusTimeoutError("timed out"),
        BusReplyError("bad reply"),
        42,
    ],
)
def test_list_items_skips_timeouts_and_bad_ids(fake_bus_factory, failure) -> None:
    bus = fake_bus_factory(
        properties={
            WATCHER_KEY: [":1.52/StatusNotifierItem", ":1.60/StatusNotifierItem"],
            _id_key(":1.52"): failure,
            _id_key(":1.60"): "discord",
        }
    )

    assert [i.app_id for i in TrayRegistry(bus).list_items()] == ["discord"]


def test_list_items_skips_malformed_item_strings(fake_bus_factory) -> None:
    bus = fake_bus_factory(
        properties={
            WATCHER_KEY: ["not-an-address", ":1.60/StatusNotifierItem"],
            _id_key(":1.60"): "discord",
        }
    )

    assert [i.app_id for i in TrayRegistry(bus).list_items()] == ["discord"]


def test_enumeration_failure_propagates(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: BusCallError("The name org.kde.StatusNotifierWatcher was not provided")})

    with pytest.raises(BusCallError, match="Failed to retrieve systray items"):
        TrayRegistry(bus).list_items()


def test_enumeration_timeout_keeps_its_type(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: BusTimeoutError("timed out")})

    with pytest.raises(BusTimeoutError):
        TrayRegistry(bus).list_items()


def test_enumeration_with_wrong_type_is_reply_error(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: ":1.52/StatusNotifierItem"})

    with pytest.raises(BusReplyError):
        TrayRegistry(bus).list_items()


def test_empty_tray(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: []})

    assert TrayRegistry(bus).list_items() == []


def test_resolve_by_app_id_returns_first_match(fake_bus_factory) -> None:
    bus = fake_bus_factory(
        properties={
            WATCHER_KEY: [":1.52/StatusNotifierItem", ":1.60/StatusNotifierItem", ":1.61/StatusNotifierItem"],
            _id_key(":1.52"): BusCallError("gone"),
            _id_key(":1.60"): "discord",
            _id_key(":1.61"): "discord",
        }
    )

    assert TrayRegistry(bus).resolve_by_app_id("discord") == ItemAddress(":1.60", "/StatusNotifierItem")


def test_resolve_by_app_id_not_found_names_the_id(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: [":1.60/StatusNotifierItem"], _id_key(":1.60"): "discord"})

    with pytest.raises(AppNotFoundError, match="Application not found: slack") as excinfo:
        TrayRegistry(bus).resolve_by_app_id("slack")

    assert excinfo.value.app_id == "slack"


def test_registry_re_enumerates_on_every_call(fake_bus_factory) -> None:
    bus = fake_bus_factory(properties={WATCHER_KEY: [":1.60/StatusNotifierItem"], _id_key(":1.60"): "discord"})
    registry = TrayRegistry(bus)

    registry.list_items()
    registry.list_items()

    watcher_reads = [entry for entry in bus.log if entry[1:] == WATCHER_KEY]
    assert len(watcher_reads) == 2
