from .region import Region, EnergySource, ENERGY_SOURCES, GRID_OPERATORS, REGION_NAMES
from .readings import ActualReading, ForecastReading, WeatherObservation
from .chart import AlignedPoint, ChartResult, ErrorMetrics, SelectedPoint


__all__ = [
    "Region",
    "EnergySource",
    "ENERGY_SOURCES",
    "GRID_OPERATORS",
    "REGION_NAMES",
    "ActualReading",
    "ForecastReading",
    "WeatherObservation",
    "AlignedPoint",
    "ChartResult",
    "ErrorMetrics",
    "SelectedPoint",
]
