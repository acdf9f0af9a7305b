"""Half-up rounding helpers."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def round_half_up(value: float, places: int = 0) -> float:
    """Round to ``places`` decimals, halves away from zero.

    Works for any finite magnitude; infinities and NaN come back unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(str(value))
    with localcontext() as ctx:
        # enough digits for the integer part plus the kept decimals
        ctx.prec = max(28, exact.adjusted() + places + 3)
        quantum = Decimal(1).scaleb(-places)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def round_int(value: float) -> int:
    """Round half-up to the nearest integer."""
    return int(round_half_up(value))
