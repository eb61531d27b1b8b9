from __future__ import annotations

import os
import subprocess
import tempfile
import traceback
from typing import Any

import pytest

from traymenu.core.errors import BusCallError


def _bus_opted_in() -> bool:
    return os.environ.get("TRAYMENU_ALLOW_BUS") == "1"


# Safety default: during pytest, avoid reading the user's real config.
os.environ.setdefault(
    "TRAYMENU_CONFIG_DIR",
    tempfile.mkdtemp(prefix="traymenu-test-config-"),
)


@pytest.fixture(autouse=True)
def _busctl_tripwire(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail loudly if a test reaches the real busctl binary.

    Tests are expected to inject a fake runner or a fake bus. Set
    TRAYMENU_ALLOW_BUS=1 to talk to the real session bus.
    """

    if _bus_opted_in():
        return

    real_run = subprocess.run

    def _tripwire_run(cmd, *args, **kwargs):
        if isinstance(cmd, (list, tuple)) and cmd and cmd[0] == "busctl":
            raise RuntimeError(
                "Tripwire: attempted to run busctl during pytest: "
                f"{' '.join(map(str, cmd))}\n\n" + "".join(traceback.format_stack(limit=30))
            )
        return real_run(cmd, *args, **kwargs)

    monkeypatch.setattr(subprocess, "run", _tripwire_run)


def variant(sig: str, data: Any) -> dict[str, Any]:
    return {"type": sig, "data": data}


def node_json(node_id: int, props: dict[str, Any] | None = None, children: list | None = None) -> list:
    """busctl JSON for one `(ia{sv}av)` menu node.

    Plain Python values in `props` are wrapped in variants by type.
    """

    wrapped = {}
    for key, value in (props or {}).items():
        if isinstance(value, dict) and set(value) == {"type", "data"}:
            wrapped[key] = value
        elif isinstance(value, bool):
            wrapped[key] = variant("b", value)
        elif isinstance(value, int):
            wrapped[key] = variant("i", value)
        else:
            wrapped[key] = variant("s", value)

    return [
        node_id,
        wrapped,
        [variant("(ia{sv}av)", child) for child in (children or [])],
    ]


class FakeBus:
    """In-memory stand-in for Busctl.

    `properties` maps (destination, path, interface, name) to a value or to an
    exception instance to raise. `calls` maps (destination, path, interface,
    method) the same way.
    """

    def __init__(self, properties: dict | None = None, calls: dict | None = None):
        self.properties = dict(properties or {})
        self.calls = dict(calls or {})
        self.log: list[tuple] = []

    def get_property(self, destination: str, path: str, interface: str, name: str) -> Any:
        key = (destination, path, interface, name)
        self.log.append(("get", *key))
        if key not in self.properties:
            raise BusCallError(f"No such object: {destination}{path}")
        value = self.properties[key]
        if isinstance(value, BaseException):
            raise value
        return value

    def call(self, destination: str, path: str, interface: str, method: str, signature: str = "", *args: Any):
        key = (destination, path, interface, method)
        self.log.append(("call", *key, signature, *args))
        if key not in self.calls:
            raise BusCallError(f"Unknown method {interface}.{method}")
        value = self.calls[key]
        if isinstance(value, BaseException):
            raise value
        return value

    def ping(self) -> None:
        return


@pytest.fixture
def fake_bus_factory():
    return FakeBus


@pytest.fixture
def make_node_json():
    return node_json


@pytest.fixture
def make_variant():
    return variant
