from __future__ import annotations

import json
import logging
import subprocess
from typing import Any, Callable, Optional

from ..errors import BusCallError, BusReplyError, BusTimeoutError, BusUnavailableError
from .failures import is_bus_unreachable, is_call_timeout


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_S = 1.0
# Bounds for every call timeout; inside them `--timeout` stays in plain decimal form.
MIN_TIMEOUT_S = 0.05
MAX_TIMEOUT_S = 60.0

_DBUS_NAME = "org.freedesktop.DBus"
_DBUS_PATH = "/org/freedesktop/DBus"
_PEER_INTERFACE = "org.freedesktop.DBus.Peer"

# Extra wall-clock allowance on top of busctl's own method-call timeout, so
# busctl normally reports the timeout itself.
_PROCESS_GRACE_S = 2.0


def unwrap_variant(value: Any) -> Any:
    """Return the payload of a busctl JSON variant.

    busctl encodes a variant as `{"type": "<sig>", "data": <value>}`; anything
    else is returned unchanged.
    """

    if isinstance(value, dict) and set(value.keys()) == {"type", "data"}:
        return value["data"]
    return value


class Busctl:
    """Blocking D-Bus client backed by the `busctl` command.

    Every call is bounded by `timeout_s`. Failures raise instead of returning
    None so callers can decide which ones are fatal.
    """

    def __init__(
        self,
        *,
        bus: str = "user",
        timeout_s: float = DEFAULT_TIMEOUT_S,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        if bus not in ("user", "system"):
            raise ValueError(f"Unknown bus {bus!r} (expected 'user' or 'system')")
        self.bus = bus
        self.timeout_s = min(MAX_TIMEOUT_S, max(MIN_TIMEOUT_S, float(timeout_s)))
        self._runner = runner if runner is not None else subprocess.run

    def _command(self, *args: str) -> list[str]:
        return [
            "busctl",
            f"--{self.bus}",
            "--json=short",
            f"--timeout={self.timeout_s:g}s",
            # Method arguments such as -1 must not be parsed as options.
            "--",
            *args,
        ]

    def _run(self, *args: str) -> Any:
        cmd = self._command(*args)
        logger.debug("Running %s", " ".join(cmd))

        try:
            cp = self._runner(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s + _PROCESS_GRACE_S,
            )
        except FileNotFoundError:
            raise BusUnavailableError("busctl not found; it ships with systemd") from None
        except OSError as exc:
            raise BusUnavailableError(f"Cannot run busctl: {exc}") from None
        except subprocess.TimeoutExpired:
            raise BusTimeoutError(f"Timed out after {self.timeout_s:g}s: {' '.join(args)}") from None

        if cp.returncode != 0:
            stderr = (cp.stderr or "").strip()
            if is_bus_unreachable(stderr):
                raise BusUnavailableError(f"Cannot connect to the {self.bus} bus: {stderr}")
            if is_call_timeout(stderr):
                raise BusTimeoutError(f"Timed out after {self.timeout_s:g}s: {' '.join(args)}")
            raise BusCallError(stderr or f"busctl exited with status {cp.returncode}")

        stdout = (cp.stdout or "").strip()
        if not stdout:
            return None

        try:
            return json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise BusReplyError(f"Undecodable busctl output: {exc}") from None

    def get_property(self, destination: str, path: str, interface: str, name: str) -> Any:
        """Read one property and return its unwrapped value."""

        reply = self._run("get-property", destination, path, interface, name)
        if reply is None:
            raise BusReplyError(f"Empty reply reading {interface}.{name}")
        return unwrap_variant(reply)

    def call(
        self,
        destination: str,
        path: str,
        interface: str,
        method: str,
        signature: str = "",
        *args: Any,
    ) -> list[Any]:
        """Call a method and return the reply values (outer variant removed)."""

        cmd = ["call", destination, path, interface, method]
        if signature:
            cmd.append(signature)
            cmd.extend(str(a) for a in args)

        reply = self._run(*cmd)
        if reply is None:
            return []

        data = unwrap_variant(reply)
        if not isinstance(data, list):
            raise BusReplyError(f"Unexpected reply from {interface}.{method}: {reply!r}")
        return data

    def ping(self) -> None:
        """Raise BusUnavailableError unless the bus daemon answers."""

        try:
            self.call(_DBUS_NAME, _DBUS_PATH, _PEER_INTERFACE, "Ping")
        except BusUnavailableError:
            raise
        except BusCallError as exc:
            raise BusUnavailableError(f"The {self.bus} bus does not respond: {exc}") from exc
