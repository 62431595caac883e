# dashboard/services/aggregation.py
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from dashboard.models import ForecastReading

# (date, value, energy_source)
DemandRow = Tuple[str, float, str]


class VintageSelection(str, Enum):
    """How forecast rows are chosen when several vintages predict the same date."""

    PINNED = "pinned"  # only rows made on one exact date_of_prediction
    LATEST = "latest"  # most recent vintage per (predicted_date, energy_source)


def normalize_sources(selected: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Plain-string set of energy sources; Enum members collapse to their values."""
    if not selected:
        return frozenset()
    return frozenset(getattr(s, "value", s) for s in selected)


def aggregate_by_date(rows: Iterable[DemandRow], selected_sources: Optional[Iterable[str]] = None) -> Dict[str, float]:
    """
    Sum row values per date for the selected energy sources.
    An empty selection sums every source. Dates without rows are not zero-filled.
    """
    wanted = normalize_sources(selected_sources)
    totals: Dict[str, float] = {}
    for date, value, energy_source in rows:
        if wanted and energy_source not in wanted:
            continue
        totals[date] = totals.get(date, 0) + value
    return totals


def select_forecast_rows(
    forecast: Sequence[ForecastReading],
    selection: VintageSelection = VintageSelection.PINNED,
    vintage: Optional[str] = None,
) -> List[ForecastReading]:
    """
    Apply a vintage-selection strategy to raw forecast rows.

    PINNED keeps rows whose date_of_prediction equals `vintage` exactly.
    LATEST keeps, for each (predicted_date, energy_source), the row with the greatest
    date_of_prediction; ISO strings compare chronologically.
    """
    if selection == VintageSelection.PINNED:
        if vintage is None:
            raise ValueError("pinned vintage selection requires a date_of_prediction")
        return [f for f in forecast if f.date_of_prediction == vintage]

    latest: Dict[Tuple[str, str], ForecastReading] = {}
    for f in forecast:
        key = (f.predicted_date, f.energy_source)
        current = latest.get(key)
        if current is None or f.date_of_prediction > current.date_of_prediction:
            latest[key] = f
    return list(latest.values())


def forecast_by_date(
    forecast: Sequence[ForecastReading],
    selected_sources: Optional[Iterable[str]] = None,
    *,
    selection: VintageSelection = VintageSelection.PINNED,
    vintage: Optional[str] = None,
) -> Dict[str, float]:
    """Vintage selection followed by aggregation on predicted_date."""
    rows = select_forecast_rows(forecast, selection, vintage)
    return aggregate_by_date(
        ((f.predicted_date, f.value, f.energy_source) for f in rows),
        selected_sources,
    )


__all__ = [
    "DemandRow",
    "VintageSelection",
    "aggregate_by_date",
    "forecast_by_date",
    "normalize_sources",
    "select_forecast_rows",
]
