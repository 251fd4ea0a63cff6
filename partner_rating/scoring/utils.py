"""
Decimal Utilities
partner_rating/scoring/utils.py

Precision-safe rounding for scoring calculations.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any


def to_decimal(value: float, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def round_half_up(value: float, places: int = 1) -> float:
    """
    Round half-up at the given decimal place.

    Python's round() uses banker's rounding (round(0.25, 1) == 0.2);
    scores round 0.25 -> 0.3.
    """
    return float(to_decimal(value, places))


def is_finite_number(value: Any) -> bool:
    """True for finite real numbers; None, NaN, inf, strings and bools are not."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def finite_or_zero(value: Any) -> float:
    """Coerce an answer value for summation; non-finite values count as 0."""
    return float(value) if is_finite_number(value) else 0.0
