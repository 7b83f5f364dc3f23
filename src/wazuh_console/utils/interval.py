"""Log interval parsing — ``15``/``15m``, ``2h``, ``1d`` to minutes and back."""

from __future__ import annotations

_UNITS = {"m": 1, "h": 60, "d": 1440}


def parse_interval(text: str) -> int | None:
    """Return the interval in minutes, or ``None`` for empty input.

    A bare number is minutes. Raises ``ValueError`` on anything else.
    """
    value = text.strip().lower()
    if not value:
        return None
    factor = 1
    if value[-1] in _UNITS:
        factor = _UNITS[value[-1]]
        value = value[:-1]
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"Invalid interval '{text}': expected e.g. 15m, 2h or 1d")
    return int(value) * factor


def format_interval(minutes: int) -> str:
    if minutes >= 1440 and minutes % 1440 == 0:
        return f"{minutes // 1440}d"
    if minutes >= 60 and minutes % 60 == 0:
        return f"{minutes // 60}h"
    return f"{minutes}m"
