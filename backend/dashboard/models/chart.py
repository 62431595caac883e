from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class AlignedPoint:
    """One chart row per date in the union of the actual, forecast and weather series."""

    date: str
    actual: Optional[float] = None
    predicted: Optional[float] = None
    predicted_past: Optional[float] = None
    predicted_future: Optional[float] = None
    confidence_high: Optional[float] = None
    confidence_low: Optional[float] = None
    comparison_predicted: Optional[float] = None
    comparison_predicted_past: Optional[float] = None
    comparison_predicted_future: Optional[float] = None
    comparison_outlier: bool = False
    is_outlier: bool = False
    is_future: bool = False
    temperature: Optional[float] = None
    temperature_past: Optional[float] = None
    temperature_future: Optional[float] = None
    humidity: Optional[float] = None
    humidity_past: Optional[float] = None
    humidity_future: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_speed_past: Optional[float] = None
    wind_speed_future: Optional[float] = None


@dataclass(frozen=True)
class ErrorMetrics:
    rmse: int = 0
    mae: int = 0
    max_error: int = 0
    overall_error_rate: float = 0.0


@dataclass(frozen=True)
class SelectedPoint:
    """Projection of a clicked chart point handed to the explanation generator."""

    date: str
    actual: Optional[float]
    predicted: Optional[float]
    temperature: Optional[float]
    is_outlier: bool
    deviation_percent: Optional[float]
    comparison_predicted: Optional[float] = None
    comparison_deviation_percent: Optional[float] = None
    days_difference: Optional[int] = None
    is_comparison_point: bool = False


@dataclass
class ChartResult:
    points: List[AlignedPoint] = field(default_factory=list)
    metrics: ErrorMetrics = field(default_factory=ErrorMetrics)
    y_domain: Tuple[int, int] = (0, 100000)
