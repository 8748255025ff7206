"""Rounding helpers shared by the series and pension computations."""

import math


def finite_or_zero(value: float) -> float:
    """Overflowed (inf) or undefined (nan) amounts degrade to 0."""
    return value if math.isfinite(value) else 0.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's ``round`` uses banker's rounding, which would move 0.5 wage
    amounts to the even neighbour. Non-finite values give 0.
    """
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))
