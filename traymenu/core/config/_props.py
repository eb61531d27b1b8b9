from __future__ import annotations

from typing import Iterable


def bool_prop(key: str, *, default: bool) -> property:
    def _get(self) -> bool:
        v = self._settings.get(key, default)
        return v if isinstance(v, bool) else bool(default)

    return property(_get)


def str_prop(key: str, *, default: str) -> property:
    def _get(self) -> str:
        v = self._settings.get(key, default)
        return v if isinstance(v, str) else str(default)

    return property(_get)


def float_prop(key: str, *, default: float, min_v: float | None = None, max_v: float | None = None) -> property:
    def _get(self) -> float:
        v = self._settings.get(key, default)
        try:
            if isinstance(v, bool):
                raise TypeError(key)
            v = float(v)
        except (TypeError, ValueError):
            v = float(default)
        if min_v is not None:
            v = max(float(min_v), v)
        if max_v is not None:
            v = min(float(max_v), v)
        return v

    return property(_get)


def choice_prop(key: str, *, default: str, choices: Iterable[str]) -> property:
    """A string setting restricted to `choices`, matched case-insensitively.

    Non-strings and unknown names read as `default`.
    """

    choices = tuple(choices)
    if default not in choices:
        raise ValueError(f"default {default!r} for {key} is not one of {choices}")

    def _get(self) -> str:
        v = self._settings.get(key)
        if isinstance(v, str) and v.strip().lower() in choices:
            return v.strip().lower()
        return default

    return property(_get)
