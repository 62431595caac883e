# dashboard/utils/numeric.py
from __future__ import annotations

import math
from typing import Optional, Union

Number = Union[int, float]


def coerce_float(value) -> Optional[float]:
    """
    Best-effort float conversion that returns None for blanks, unparseable and non-finite values.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def safe_divide(numerator, denominator) -> Optional[float]:
    """
    Divide while guarding against None/zero/invalid values.
    """
    if numerator is None or denominator in (None, 0):
        return None
    try:
        return float(numerator) / float(denominator)
    except (TypeError, ValueError, ZeroDivisionError):
        return None


def round_half_up(value: Number, digits: int = 0) -> float:
    """
    Round like JavaScript's Math.round: halves go up, not to even.
    """
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


__all__ = ["coerce_float", "safe_divide", "round_half_up"]
