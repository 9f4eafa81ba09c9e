"""
Human-readable rendering of raw scrape metrics.

All helpers are pure and total over non-negative finite numbers.
Rounding is half-up on the decimal form of the value, so 12.345 -> "12.35".
"""

import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

Number = Union[int, float]

BYTE_UNITS = ("B", "KB", "MB", "GB")
KILO = 1024


def _fixed(value: Number, places: int) -> str:
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimal places
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return str(exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def format_bytes(num_bytes: Number) -> str:
    if num_bytes == 0:
        return "0 B"

    # floor(log1024(bytes)), clamped to the unit list
    unit = 0
    while unit < len(BYTE_UNITS) - 1 and num_bytes >= KILO ** (unit + 1):
        unit += 1

    return f"{_fixed(num_bytes / KILO ** unit, 2)} {BYTE_UNITS[unit]}"


def format_duration(seconds: Number) -> str:
    if seconds < 1:
        return f"{_fixed(seconds * 1000, 0)}ms"
    if seconds < 60:
        return f"{_fixed(seconds, 2)}s"

    # No hours unit: long runs show as large minute counts
    minutes = math.floor(seconds / 60)
    secs = _fixed(seconds % 60, 0)
    return f"{minutes}m {secs}s"


def format_percent(value: Number) -> str:
    return f"{_fixed(value, 1)}%"


def format_count(value: Number) -> str:
    return f"{int(value):,}"


def format_date(value: datetime) -> str:
    return value.date().isoformat()
