"""Decimal rounding for reported scores."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 2) -> float:
    """
    Round to a fixed number of decimals, sending exact halves away from zero.

    Built-in round() sends halves to the even digit (50.125 → 50.12); reported
    scores round them up (50.125 → 50.13). The float is converted exactly, so
    a value like 1.005 (stored as 1.00499...) still rounds down.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP))
