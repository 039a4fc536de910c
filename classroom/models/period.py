from __future__ import annotations

import math
import re
from typing import Tuple

TIME_SLOTS: Tuple[str, ...] = ("09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00")
WEEKDAYS: Tuple[str, ...] = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

LUNCH_BREAK = "Lunch Break"
FREE_PERIOD = "Free Period"
# Label used for manually created rows before a class is placed
FREE = "Free"

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def leading_int(value: object) -> int | None:
    """Parse the integer prefix of ``value`` ("09:00" -> 9, "3rd" -> 3)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    m = _LEADING_INT.match(str(value))
    if m is None:
        return None
    return int(m.group(1))


def slot_hour(time: str) -> int | None:
    return leading_int(time)


def clock_key(time: str) -> int:
    # Minutes since midnight; unparsable times sort last
    parts = str(time).strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        return 24 * 60
    return hours * 60 + minutes
