# dashboard/services/repository.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd
import structlog

from dashboard.models import ActualReading, ForecastReading, WeatherObservation
from dashboard.observability.instrument import log_job
from dashboard.utils.numeric import coerce_float

logger = structlog.get_logger(__name__)

HISTORICAL_COLUMNS = ["Date", "Region", "Value", "UnitOfMeasure", "Source", "EnergySource"]
FORECAST_COLUMNS = ["DateOfPrediction", "PredictedDate", "Region", "Value", "UnitOfMeasure", "EnergySource"]
WEATHER_COLUMNS = ["Date", "Region", "Temperature", "WindSpeed", "Humidity"]


@dataclass(frozen=True)
class _Tables:
    historical: pd.DataFrame
    forecast: pd.DataFrame
    weather: pd.DataFrame


def _read_table(path: Path, columns: Sequence[str], numeric: Sequence[str]) -> pd.DataFrame:
    """
    Read one CSV as strings, coerce the numeric columns and drop rows whose numbers are
    blank, unparseable or not finite.
    A missing file yields an empty frame so the API degrades to empty series.
    """
    if not path.exists():
        logger.warning("repository.file_missing", path=str(path))
        return pd.DataFrame(columns=list(columns))

    df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name} is missing columns: {', '.join(missing)}")

    df = df[list(columns)].copy()
    for col in columns:
        df[col] = df[col].str.strip()
    for col in numeric:
        df[col] = df[col].map(coerce_float)

    before = len(df)
    df = df.dropna(subset=list(numeric))
    df = df.astype({col: float for col in numeric})
    if len(df) != before:
        logger.warning("repository.rows_dropped", path=str(path), dropped=before - len(df))
    return df.reset_index(drop=True)


class DemandRepository:
    """
    Read-only access to the three demand CSV files.

    Files are parsed on first use and held until `refresh()` is called; a refresh swaps in
    freshly parsed tables atomically. Queries filter by region and an inclusive ISO date range.
    """

    def __init__(
        self,
        data_dir: Path | str,
        *,
        historical_file: str = "historical_demand.csv",
        forecast_file: str = "forecasted_demand.csv",
        weather_file: str = "weather.csv",
    ) -> None:
        self.data_dir = Path(data_dir)
        self.historical_path = self.data_dir / historical_file
        self.forecast_path = self.data_dir / forecast_file
        self.weather_path = self.data_dir / weather_file
        self._tables: Optional[_Tables] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings) -> "DemandRepository":
        return cls(
            settings.DATA_DIR,
            historical_file=settings.HISTORICAL_FILE,
            forecast_file=settings.FORECAST_FILE,
            weather_file=settings.WEATHER_FILE,
        )

    @log_job("repository.load")
    def _load(self) -> _Tables:
        return _Tables(
            historical=_read_table(self.historical_path, HISTORICAL_COLUMNS, ["Value"]),
            forecast=_read_table(self.forecast_path, FORECAST_COLUMNS, ["Value"]),
            weather=_read_table(self.weather_path, WEATHER_COLUMNS, ["Temperature", "WindSpeed", "Humidity"]),
        )

    def _get_tables(self) -> _Tables:
        tables = self._tables
        if tables is not None:
            return tables
        with self._lock:
            if self._tables is None:
                self._tables = self._load()
            return self._tables

    def refresh(self) -> Dict[str, int]:
        """Re-read every file and return row counts per table."""
        tables = self._load()
        with self._lock:
            self._tables = tables
        return {
            "historical": len(tables.historical),
            "forecast": len(tables.forecast),
            "weather": len(tables.weather),
        }

    @property
    def loaded(self) -> bool:
        return self._tables is not None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def _window(df: pd.DataFrame, date_col: str, region: str, start: str, end: str) -> pd.DataFrame:
        mask = (df["Region"] == region) & (df[date_col] >= start) & (df[date_col] <= end)
        return df.loc[mask]

    def historical(self, region: str, start: str, end: str) -> List[ActualReading]:
        df = self._window(self._get_tables().historical, "Date", region, start, end)
        return [
            ActualReading(
                date=r.Date,
                region=r.Region,
                value=float(r.Value),
                unit_of_measure=r.UnitOfMeasure,
                source=r.Source,
                energy_source=r.EnergySource,
            )
            for r in df.itertuples(index=False)
        ]

    def forecast(self, region: str, start: str, end: str) -> List[ForecastReading]:
        """Forecast rows whose predicted date falls in range, every vintage included."""
        df = self._window(self._get_tables().forecast, "PredictedDate", region, start, end)
        return [
            ForecastReading(
                date_of_prediction=r.DateOfPrediction,
                predicted_date=r.PredictedDate,
                region=r.Region,
                value=float(r.Value),
                unit_of_measure=r.UnitOfMeasure,
                energy_source=r.EnergySource,
            )
            for r in df.itertuples(index=False)
        ]

    def weather(self, region: str, start: str, end: str) -> List[WeatherObservation]:
        df = self._window(self._get_tables().weather, "Date", region, start, end)
        return [
            WeatherObservation(
                date=r.Date,
                region=r.Region,
                temperature=float(r.Temperature),
                wind_speed=float(r.WindSpeed),
                humidity=float(r.Humidity),
            )
            for r in df.itertuples(index=False)
        ]

    def forecast_vintages(self, region: str, start: str, end: str) -> List[str]:
        """Distinct dates of prediction available for the range, ascending."""
        df = self._window(self._get_tables().forecast, "PredictedDate", region, start, end)
        return sorted(df["DateOfPrediction"].unique().tolist())


__all__ = ["DemandRepository", "FORECAST_COLUMNS", "HISTORICAL_COLUMNS", "WEATHER_COLUMNS"]
