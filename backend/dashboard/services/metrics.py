# dashboard/services/metrics.py
from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from dashboard.models import AlignedPoint, ErrorMetrics
from dashboard.utils.numeric import round_half_up

DEFAULT_Y_DOMAIN: Tuple[int, int] = (0, 100000)
Y_DOMAIN_PADDING = 0.08


def compute_error_metrics(points: Iterable[AlignedPoint]) -> ErrorMetrics:
    """
    RMSE, MAE, max absolute error and mean absolute percent error over the points that
    carry both an actual and a primary predicted value.

    Integers are rounded half-up; the percent error keeps one decimal. With no eligible
    pairs every metric is 0. Pairs whose actual is 0 contribute to the absolute errors
    but not to the percent error.
    """
    pairs = [(p.actual, p.predicted) for p in points if p.actual is not None and p.predicted is not None]
    if not pairs:
        return ErrorMetrics()

    errors = [abs(a - p) for a, p in pairs]
    n = len(errors)
    percent_terms = [abs(a - p) / abs(a) for a, p in pairs if a != 0]

    rmse = math.sqrt(sum(e * e for e in errors) / n)
    mae = sum(errors) / n
    rate = (sum(percent_terms) / len(percent_terms)) * 100 if percent_terms else 0.0

    return ErrorMetrics(
        rmse=int(round_half_up(rmse)),
        mae=int(round_half_up(mae)),
        max_error=int(round_half_up(max(errors))),
        overall_error_rate=round_half_up(rate, 1),
    )


def compute_y_domain(points: Iterable[AlignedPoint]) -> Tuple[int, int]:
    """
    Fixed y-axis bounds from actual and primary predicted values, padded by 8% of the range.
    Comparison values are left out so the axis does not move with the comparison vintage.
    """
    values: List[float] = []
    for p in points:
        if p.actual is not None:
            values.append(p.actual)
        if p.predicted is not None:
            values.append(p.predicted)
    if not values:
        return DEFAULT_Y_DOMAIN
    lo, hi = min(values), max(values)
    padding = (hi - lo) * Y_DOMAIN_PADDING
    return (math.floor(lo - padding), math.ceil(hi + padding))


__all__ = ["DEFAULT_Y_DOMAIN", "compute_error_metrics", "compute_y_domain"]
