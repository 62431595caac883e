from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ActualReading:
    date: str  # ISO yyyy-mm-dd
    region: str
    value: float
    unit_of_measure: str
    source: str
    energy_source: str


@dataclass(frozen=True)
class ForecastReading:
    date_of_prediction: str  # vintage
    predicted_date: str
    region: str
    value: float
    unit_of_measure: str
    energy_source: str


@dataclass(frozen=True)
class WeatherObservation:
    date: str
    region: str
    temperature: float
    wind_speed: float
    humidity: float
