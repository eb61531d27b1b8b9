from __future__ import annotations


def is_bus_unreachable(stderr: str) -> bool:
    """Best-effort check for "no bus to talk to" errors from busctl.

    busctl reports these as e.g. `Failed to connect to bus: No medium found`
    when no session bus is running (ssh login, minimal containers).
    """

    msg = (stderr or "").lower()
    return "failed to connect to bus" in msg or "failed to connect to user scope bus" in msg


def is_call_timeout(stderr: str) -> bool:
    """Best-effort check for a method call that ran into --timeout."""

    msg = (stderr or "").lower()
    return "timed out" in msg or "timeout was reached" in msg
