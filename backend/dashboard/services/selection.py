# dashboard/services/selection.py
from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from dashboard.models import AlignedPoint, SelectedPoint
from dashboard.services.outliers import deviation_percent


def days_between(primary_date: str, comparison_date: str) -> int:
    """Whole days from the comparison vintage to the primary vintage."""
    return (date.fromisoformat(primary_date) - date.fromisoformat(comparison_date)).days


def to_selected_point(
    point: AlignedPoint,
    *,
    primary_date: Optional[str] = None,
    comparison_date: Optional[str] = None,
    is_comparison_point: bool = False,
) -> SelectedPoint:
    """
    Narrow a chart point to what the explanation panel needs. Comparison fields are only
    filled when a comparison vintage is active.
    """
    selected = SelectedPoint(
        date=point.date,
        actual=point.actual,
        predicted=point.predicted,
        temperature=point.temperature,
        is_outlier=point.is_outlier,
        deviation_percent=deviation_percent(point.actual, point.predicted),
    )
    if not comparison_date:
        return selected

    return replace(
        selected,
        comparison_predicted=point.comparison_predicted,
        comparison_deviation_percent=deviation_percent(point.comparison_predicted, point.predicted),
        days_difference=days_between(primary_date, comparison_date) if primary_date else None,
        is_comparison_point=is_comparison_point,
    )


def find_point(points: Sequence[AlignedPoint], day: str) -> Optional[AlignedPoint]:
    return next((p for p in points if p.date == day), None)


__all__ = ["days_between", "find_point", "to_selected_point"]
