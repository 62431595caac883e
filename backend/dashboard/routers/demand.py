# dashboard/routers/demand.py
from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query

from dashboard.config import Settings
from dashboard.deps import get_app_settings, get_repository
from dashboard.errors import (
    InvalidRangeError,
    PointNotFoundError,
    UnknownEnergySourceError,
    UnknownRegionError,
)
from dashboard.models import EnergySource, Region
from dashboard.observability.metrics import record_outliers
from dashboard.schemas.common import meta_now, ok
from dashboard.schemas.demand import (
    ActualReadingOut,
    AlignedPointOut,
    ChartData,
    ChartMetadata,
    DateRange,
    DemandData,
    DemandMetadata,
    ErrorMetricsOut,
    ForecastReadingOut,
    SelectedPointOut,
    WeatherOut,
)
from dashboard.services.aggregation import VintageSelection
from dashboard.services.chart import build_chart
from dashboard.services.repository import DemandRepository
from dashboard.services.selection import find_point, to_selected_point

router = APIRouter(prefix="/api/demand", tags=["demand"])


def _resolve_window(
    settings: Settings, state: Optional[str], start: Optional[date], end: Optional[date]
) -> Tuple[Region, str, str]:
    code = state or settings.DEFAULT_REGION
    try:
        region = Region.parse(code)
    except ValueError:
        raise UnknownRegionError(f"Unknown region: {code}", details={"allowed": [r.value for r in Region]}) from None

    start_s = start.isoformat() if start else settings.DEFAULT_START_DATE
    end_s = end.isoformat() if end else settings.DEFAULT_END_DATE
    if start_s > end_s:
        raise InvalidRangeError(f"start ({start_s}) must not be after end ({end_s})")
    return region, start_s, end_s


def _resolve_sources(energy_sources: Optional[List[str]]) -> List[str]:
    """Canonical energy-source names; empty means all."""
    by_lower = {s.value.lower(): s.value for s in EnergySource}
    out: List[str] = []
    for raw in energy_sources or []:
        for name in raw.split(","):
            name = name.strip()
            if not name:
                continue
            canonical = by_lower.get(name.lower())
            if canonical is None:
                raise UnknownEnergySourceError(
                    f"Unknown energy source: {name}", details={"allowed": list(by_lower.values())}
                )
            if canonical not in out:
                out.append(canonical)
    return out


@router.get("")
def get_demand(
    state: str | None = Query(None, description="Region code, e.g. TX"),
    start: date | None = Query(None),
    end: date | None = Query(None),
    settings: Settings = Depends(get_app_settings),
    repo: DemandRepository = Depends(get_repository),
):
    """
    Raw rows for a region and inclusive date range: actuals by date, forecasts by
    predicted date (every vintage) and weather by date.
    """
    region, start_s, end_s = _resolve_window(settings, state, start, end)
    data = DemandData(
        actual=[ActualReadingOut.model_validate(r) for r in repo.historical(region.value, start_s, end_s)],
        forecast=[ForecastReadingOut.model_validate(r) for r in repo.forecast(region.value, start_s, end_s)],
        weather=[WeatherOut.model_validate(r) for r in repo.weather(region.value, start_s, end_s)],
        metadata=DemandMetadata(state=region.value, date_range=DateRange(start=start_s, end=end_s)),
    )
    return ok(data=data.to_wire(), meta=meta_now(region=region.value, start=start_s, end=end_s))


def _chart(
    settings: Settings,
    repo: DemandRepository,
    *,
    state: Optional[str],
    start: Optional[date],
    end: Optional[date],
    energy_sources: Optional[List[str]],
    primary_date: Optional[date],
    comparison_date: Optional[date],
    mode: VintageSelection,
):
    region, start_s, end_s = _resolve_window(settings, state, start, end)
    sources = _resolve_sources(energy_sources)
    primary_s = primary_date.isoformat() if primary_date else settings.REAL_TODAY
    comparison_s = comparison_date.isoformat() if comparison_date else None

    result = build_chart(
        repo,
        region=region.value,
        start=start_s,
        end=end_s,
        energy_sources=sources,
        primary_date=primary_s,
        comparison_date=comparison_s,
        selection=mode,
        real_today=settings.REAL_TODAY,
    )
    metadata = ChartMetadata(
        state=region.value,
        date_range=DateRange(start=start_s, end=end_s),
        mode=mode.value,
        primary_date=primary_s,
        comparison_date=comparison_s,
        energy_sources=sources,
        vintages=repo.forecast_vintages(region.value, start_s, end_s),
    )
    return region, result, metadata


@router.get("/chart")
def get_chart(
    state: str | None = Query(None, description="Region code, e.g. TX"),
    start: date | None = Query(None),
    end: date | None = Query(None),
    energy_sources: List[str] | None = Query(None, description="Repeat or comma-separate; empty = all"),
    primary_date: date | None = Query(None, description="Forecast vintage treated as current"),
    comparison_date: date | None = Query(None, description="Second vintage to compare against"),
    mode: VintageSelection = Query(VintageSelection.PINNED),
    settings: Settings = Depends(get_app_settings),
    repo: DemandRepository = Depends(get_repository),
):
    """
    Returns { points, metrics, yDomain, metadata } with one aligned point per date.
    """
    region, result, metadata = _chart(
        settings,
        repo,
        state=state,
        start=start,
        end=end,
        energy_sources=energy_sources,
        primary_date=primary_date,
        comparison_date=comparison_date,
        mode=mode,
    )
    record_outliers(
        region.value,
        actual=sum(1 for p in result.points if p.is_outlier),
        comparison=sum(1 for p in result.points if p.comparison_outlier),
    )
    data = ChartData(
        points=[AlignedPointOut.model_validate(p) for p in result.points],
        metrics=ErrorMetricsOut.model_validate(result.metrics),
        y_domain=result.y_domain,
        metadata=metadata,
    )
    return ok(
        data=data.to_wire(),
        meta=meta_now(
            region=region.value,
            start=metadata.date_range.start,
            end=metadata.date_range.end,
            mode=metadata.mode,
            primary_date=metadata.primary_date,
            comparison_date=metadata.comparison_date,
        ),
    )


@router.get("/point")
def get_point(
    day: date = Query(..., alias="date", description="Chart date to project"),
    state: str | None = Query(None),
    start: date | None = Query(None),
    end: date | None = Query(None),
    energy_sources: List[str] | None = Query(None),
    primary_date: date | None = Query(None),
    comparison_date: date | None = Query(None),
    comparison: bool = Query(False, description="Project the comparison series instead of the primary"),
    mode: VintageSelection = Query(VintageSelection.PINNED),
    settings: Settings = Depends(get_app_settings),
    repo: DemandRepository = Depends(get_repository),
):
    """The selected-point projection consumed by the explanation panel."""
    region, result, metadata = _chart(
        settings,
        repo,
        state=state,
        start=start,
        end=end,
        energy_sources=energy_sources,
        primary_date=primary_date,
        comparison_date=comparison_date,
        mode=mode,
    )
    point = find_point(result.points, day.isoformat())
    if point is None:
        raise PointNotFoundError(f"No chart point on {day.isoformat()}")

    selected = to_selected_point(
        point,
        primary_date=metadata.primary_date,
        comparison_date=metadata.comparison_date,
        is_comparison_point=comparison and metadata.comparison_date is not None,
    )
    return ok(
        data=SelectedPointOut.model_validate(selected).to_wire(),
        meta=meta_now(region=region.value, date=day.isoformat()),
    )


@router.post("/refresh")
def refresh_data(repo: DemandRepository = Depends(get_repository)):
    """Re-read the CSV files; returns row counts per table."""
    counts = repo.refresh()
    return ok(data=counts, meta=meta_now())
