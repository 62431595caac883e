# dashboard/services/outliers.py
from __future__ import annotations

from typing import Optional

from dashboard.utils.numeric import safe_divide

ACTUAL_THRESHOLD = 0.10
COMPARISON_PAST_THRESHOLD = 0.10
COMPARISON_FUTURE_THRESHOLD = 0.05


def deviation_ratio(value: Optional[float], baseline: Optional[float]) -> Optional[float]:
    """
    |value - baseline| / baseline, or None when either side is missing or baseline is 0.
    """
    if value is None or baseline is None:
        return None
    return safe_divide(abs(value - baseline), baseline)


def deviation_percent(value: Optional[float], baseline: Optional[float]) -> Optional[float]:
    """Signed (value - baseline) / baseline * 100; None on missing input or zero baseline."""
    if value is None or baseline is None:
        return None
    ratio = safe_divide(value - baseline, baseline)
    return None if ratio is None else ratio * 100


def is_actual_outlier(actual: Optional[float], predicted: Optional[float]) -> bool:
    """Actual misses the primary forecast by strictly more than 10%."""
    ratio = deviation_ratio(actual, predicted)
    return ratio is not None and ratio > ACTUAL_THRESHOLD


def comparison_threshold(is_future: bool) -> float:
    return COMPARISON_FUTURE_THRESHOLD if is_future else COMPARISON_PAST_THRESHOLD


def is_comparison_outlier(comparison: Optional[float], predicted: Optional[float], *, is_future: bool) -> bool:
    """
    Comparison vintage diverges from the primary vintage by more than the threshold:
    5% for dates after the primary date, 10% otherwise.
    """
    ratio = deviation_ratio(comparison, predicted)
    return ratio is not None and ratio > comparison_threshold(is_future)


__all__ = [
    "ACTUAL_THRESHOLD",
    "COMPARISON_FUTURE_THRESHOLD",
    "COMPARISON_PAST_THRESHOLD",
    "comparison_threshold",
    "deviation_percent",
    "deviation_ratio",
    "is_actual_outlier",
    "is_comparison_outlier",
]
