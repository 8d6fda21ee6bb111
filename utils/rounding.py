"""Price rounding helpers shared by the level engine and the display layer."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_away(value: float, digits: int = 2) -> float:
    """Round ``value`` to ``digits`` decimals, ties away from zero.

    The decimal is built from ``repr(value)`` so that a price like ``1.005``
    rounds to ``1.01`` instead of inheriting the binary representation error
    of the float. Non-finite values are returned unchanged.
    """

    if not math.isfinite(value):
        return value

    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def round_price(value: float) -> float:
    return round_half_away(value, 2)


def round_to_integer(value: float) -> float:
    return round_half_away(value, 0)
