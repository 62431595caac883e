# dashboard/services/merge.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from dashboard.models import (
    ActualReading,
    AlignedPoint,
    ForecastReading,
    WeatherObservation,
)
from dashboard.services.aggregation import (
    VintageSelection,
    aggregate_by_date,
    forecast_by_date,
)
from dashboard.services.outliers import is_actual_outlier, is_comparison_outlier

REAL_TODAY = "2026-02-13"
CONFIDENCE_BAND = 0.10

# Fields split into *_past / *_future and stitched at the primary date.
SPLIT_FIELDS = ("predicted", "comparison_predicted", "temperature", "humidity", "wind_speed")


def _split(value: Optional[float], is_future: bool) -> Dict[str, Optional[float]]:
    return {"past": None if is_future else value, "future": value if is_future else None}


def _stitch_boundary(points: List[AlignedPoint], primary_date: str) -> None:
    """
    Copy each present value on the primary-date point into its *_future field,
    so the past and future line segments share that point.
    """
    boundary = next((p for p in points if p.date == primary_date), None)
    if boundary is None:
        return
    for name in SPLIT_FIELDS:
        value = getattr(boundary, name)
        if value is not None:
            setattr(boundary, f"{name}_future", value)


def merge_chart_data(
    actual: Sequence[ActualReading],
    forecast: Sequence[ForecastReading],
    weather: Sequence[WeatherObservation],
    selected_sources: Optional[Iterable[str]],
    primary_date: str,
    comparison_date: Optional[str] = None,
    *,
    selection: VintageSelection = VintageSelection.PINNED,
    real_today: str = REAL_TODAY,
) -> List[AlignedPoint]:
    """
    Align actuals, the primary forecast vintage, an optional comparison vintage and weather
    into one point per date, ordered ascending.

    `primary_date` is both the pinned vintage (PINNED selection) and the past/future
    reference: a point is future when its date is strictly after it. The comparison series
    is always pinned to `comparison_date`.
    """
    sources = list(selected_sources or [])

    actual_by_date = aggregate_by_date(
        ((a.date, a.value, a.energy_source) for a in actual if a.date <= real_today),
        sources,
    )
    primary_by_date = forecast_by_date(forecast, sources, selection=selection, vintage=primary_date)

    comparison_by_date: Dict[str, float] = {}
    if comparison_date:
        comparison_by_date = forecast_by_date(
            forecast, sources, selection=VintageSelection.PINNED, vintage=comparison_date
        )

    weather_by_date: Dict[str, WeatherObservation] = {}
    for w in weather:
        weather_by_date[w.date] = w

    all_dates = set(actual_by_date) | set(primary_by_date) | set(comparison_by_date) | set(weather_by_date)

    points: List[AlignedPoint] = []
    for date in sorted(all_dates):
        is_future = date > primary_date
        actual_value = actual_by_date.get(date)
        predicted = primary_by_date.get(date)
        comparison = comparison_by_date.get(date)
        w = weather_by_date.get(date)
        temperature = w.temperature if w else None
        humidity = w.humidity if w else None
        wind_speed = w.wind_speed if w else None

        is_outlier = False
        comparison_outlier = False
        if predicted is not None:
            is_outlier = is_actual_outlier(actual_value, predicted)
            comparison_outlier = is_comparison_outlier(comparison, predicted, is_future=is_future)

        pred = _split(predicted, is_future)
        comp = _split(comparison, is_future)
        temp = _split(temperature, is_future)
        hum = _split(humidity, is_future)
        wind = _split(wind_speed, is_future)

        points.append(
            AlignedPoint(
                date=date,
                actual=actual_value,
                predicted=predicted,
                predicted_past=pred["past"],
                predicted_future=pred["future"],
                confidence_high=predicted * (1 + CONFIDENCE_BAND) if predicted is not None else None,
                confidence_low=predicted * (1 - CONFIDENCE_BAND) if predicted is not None else None,
                comparison_predicted=comparison,
                comparison_predicted_past=comp["past"],
                comparison_predicted_future=comp["future"],
                comparison_outlier=comparison_outlier,
                is_outlier=is_outlier,
                is_future=is_future,
                temperature=temperature,
                temperature_past=temp["past"],
                temperature_future=temp["future"],
                humidity=humidity,
                humidity_past=hum["past"],
                humidity_future=hum["future"],
                wind_speed=wind_speed,
                wind_speed_past=wind["past"],
                wind_speed_future=wind["future"],
            )
        )

    _stitch_boundary(points, primary_date)
    return points


__all__ = ["CONFIDENCE_BAND", "REAL_TODAY", "SPLIT_FIELDS", "merge_chart_data"]
