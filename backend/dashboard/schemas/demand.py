# dashboard/schemas/demand.py
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models speak camelCase; Python code keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ActualReadingOut(CamelModel):
    date: str
    region: str
    value: float
    unit_of_measure: str
    source: str
    energy_source: str


class ForecastReadingOut(CamelModel):
    date_of_prediction: str
    predicted_date: str
    region: str
    value: float
    unit_of_measure: str
    energy_source: str


class WeatherOut(CamelModel):
    date: str
    region: str
    temperature: float
    wind_speed: float
    humidity: float


class DateRange(CamelModel):
    start: str
    end: str


class DemandMetadata(CamelModel):
    state: str
    date_range: DateRange


class DemandData(CamelModel):
    actual: List[ActualReadingOut]
    forecast: List[ForecastReadingOut]
    weather: List[WeatherOut]
    metadata: DemandMetadata


class AlignedPointOut(CamelModel):
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


class ErrorMetricsOut(CamelModel):
    rmse: int
    mae: int
    max_error: int
    overall_error_rate: float


class SelectedPointOut(CamelModel):
    date: str
    actual: Optional[float] = None
    predicted: Optional[float] = None
    temperature: Optional[float] = None
    is_outlier: bool = False
    deviation_percent: Optional[float] = None
    comparison_predicted: Optional[float] = None
    comparison_deviation_percent: Optional[float] = None
    days_difference: Optional[int] = None
    is_comparison_point: bool = False


class ChartMetadata(CamelModel):
    state: str
    date_range: DateRange
    mode: str
    primary_date: str
    comparison_date: Optional[str] = None
    energy_sources: List[str]
    vintages: List[str]


class ChartData(CamelModel):
    points: List[AlignedPointOut]
    metrics: ErrorMetricsOut
    y_domain: Tuple[int, int]
    metadata: ChartMetadata


__all__ = [
    "ActualReadingOut",
    "AlignedPointOut",
    "CamelModel",
    "ChartData",
    "ChartMetadata",
    "DateRange",
    "DemandData",
    "DemandMetadata",
    "ErrorMetricsOut",
    "ForecastReadingOut",
    "SelectedPointOut",
    "WeatherOut",
]
