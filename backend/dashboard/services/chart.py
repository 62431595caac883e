# dashboard/services/chart.py
from __future__ import annotations

from typing import Iterable, Optional

from dashboard.models import ChartResult
from dashboard.observability.instrument import log_job
from dashboard.services.aggregation import VintageSelection
from dashboard.services.merge import REAL_TODAY, merge_chart_data
from dashboard.services.metrics import compute_error_metrics, compute_y_domain
from dashboard.services.repository import DemandRepository


@log_job("chart.build")
def build_chart(
    repo: DemandRepository,
    *,
    region: str,
    start: str,
    end: str,
    energy_sources: Optional[Iterable[str]] = None,
    primary_date: str = REAL_TODAY,
    comparison_date: Optional[str] = None,
    selection: VintageSelection = VintageSelection.PINNED,
    real_today: str = REAL_TODAY,
) -> ChartResult:
    """
    High-level service: read the three series for a region/range, merge them against the
    chosen vintages, then derive error metrics and the y-axis domain.
    """
    points = merge_chart_data(
        repo.historical(region, start, end),
        repo.forecast(region, start, end),
        repo.weather(region, start, end),
        energy_sources,
        primary_date,
        comparison_date,
        selection=selection,
        real_today=real_today,
    )
    return ChartResult(
        points=points,
        metrics=compute_error_metrics(points),
        y_domain=compute_y_domain(points),
    )


__all__ = ["build_chart"]
