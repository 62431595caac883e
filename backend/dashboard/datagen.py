# dashboard/datagen.py
"""
Synthetic demand, forecast and weather CSVs for the five regions.

    python -m dashboard.datagen --out data

Actuals stop at the real-today date. Every predicted date gets one forecast vintage: one
day ahead for past dates and up to fourteen days ahead for dates after today. Forecasts
follow the expected temperature curve, so they miss the cold snaps that the actuals see.
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import structlog

from dashboard.models import ENERGY_SOURCES, Region
from dashboard.observability.logging import configure_logging

logger = structlog.get_logger(__name__)

START_DATE = date(2026, 1, 17)
TODAY = date(2026, 2, 13)
END_DATE = date(2026, 2, 20)
MAX_LEAD_DAYS = 14


@dataclass(frozen=True)
class RegionProfile:
    region: Region
    base_load: float
    amplitude: float
    base_temp: float
    temp_amplitude: float
    # gas, nuclear, solar, wind
    energy_mix: Tuple[float, float, float, float]
    cold_snap_day: Optional[int] = None
    cold_snap_duration: int = 2
    cold_snap_drop: float = 20


PROFILES: List[RegionProfile] = [
    RegionProfile(Region.TX, 42000, 5000, 52, 12, (0.40, 0.10, 0.22, 0.28), cold_snap_day=8, cold_snap_duration=3, cold_snap_drop=30),
    RegionProfile(Region.CA, 28000, 3000, 58, 8, (0.35, 0.08, 0.32, 0.25)),
    RegionProfile(Region.NY, 18000, 2500, 32, 10, (0.38, 0.30, 0.08, 0.24), cold_snap_day=15, cold_snap_duration=2, cold_snap_drop=20),
    RegionProfile(Region.FL, 22000, 2000, 65, 6, (0.55, 0.12, 0.20, 0.13)),
    RegionProfile(Region.IL, 15000, 2000, 28, 10, (0.25, 0.50, 0.10, 0.15), cold_snap_day=10, cold_snap_duration=2, cold_snap_drop=18),
]


def _seed(region: Region) -> int:
    code = region.value
    return ord(code[0]) * 1000 + ord(code[1])


def _temperature_load(temp: float) -> float:
    """Heating load below 40°F, cooling load above 75°F."""
    if temp < 40:
        return (40 - temp) * 120
    if temp > 75:
        return (temp - 75) * 100
    return 0.0


def _weekday_load(profile: RegionProfile, day: date) -> float:
    is_weekend = day.weekday() >= 5
    return -profile.amplitude * 0.4 if is_weekend else profile.amplitude * 0.3


def generate_region(profile: RegionProfile) -> Dict[str, List[dict]]:
    rng = np.random.default_rng(_seed(profile.region))
    total_days = (END_DATE - START_DATE).days
    historical_days = (TODAY - START_DATE).days
    code = profile.region.value

    historical: List[dict] = []
    forecast: List[dict] = []
    weather: List[dict] = []

    for d in range(total_days + 1):
        day = START_DATE + timedelta(days=d)
        iso = day.isoformat()
        season = profile.temp_amplitude * np.sin(d / 28 * np.pi * 2)

        temp = profile.base_temp + season + (rng.random() - 0.5) * 8
        if profile.cold_snap_day is not None and profile.cold_snap_day <= d < profile.cold_snap_day + profile.cold_snap_duration:
            temp -= profile.cold_snap_drop
        temp = round(temp)
        wind = int(np.clip(round(10 + (rng.random() - 0.5) * 15 + np.sin(d / 14 * np.pi) * 5), 2, 35))
        humidity = int(np.clip(round(55 + (rng.random() - 0.5) * 40 + np.cos(d / 21 * np.pi) * 10), 20, 95))
        weather.append({"Date": iso, "Region": code, "Temperature": temp, "WindSpeed": wind, "Humidity": humidity})

        true_demand = (
            profile.base_load
            + _weekday_load(profile, day)
            + _temperature_load(temp)
            + (rng.random() - 0.5) * profile.amplitude * 0.6
        )

        if d <= historical_days:
            for share, source in zip(profile.energy_mix, ENERGY_SOURCES):
                noise = (rng.random() - 0.5) * 0.04
                historical.append({
                    "Date": iso,
                    "Region": code,
                    "Value": int(round(true_demand * (share + noise))),
                    "UnitOfMeasure": "MWh",
                    "Source": profile.region.source,
                    "EnergySource": source,
                })

        lead = min(d - historical_days, MAX_LEAD_DAYS) if d > historical_days else 1
        vintage = (day - timedelta(days=lead)).isoformat()
        expected_temp = profile.base_temp + season
        forecast_demand = (
            profile.base_load
            + _weekday_load(profile, day)
            + _temperature_load(expected_temp)
            + (rng.random() - 0.5) * profile.amplitude * 0.3
        )
        for share, source in zip(profile.energy_mix, ENERGY_SOURCES):
            noise = (rng.random() - 0.5) * 0.03
            forecast.append({
                "DateOfPrediction": vintage,
                "PredictedDate": iso,
                "Region": code,
                "Value": int(round(forecast_demand * (share + noise))),
                "UnitOfMeasure": "MWh",
                "EnergySource": source,
            })

    return {"historical": historical, "forecast": forecast, "weather": weather}


def generate(out_dir: Path | str) -> Dict[str, int]:
    """Write the three CSV files into `out_dir` and return row counts."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    tables: Dict[str, List[dict]] = {"historical": [], "forecast": [], "weather": []}
    for profile in PROFILES:
        for name, rows in generate_region(profile).items():
            tables[name].extend(rows)

    pd.DataFrame(tables["historical"]).to_csv(out / "historical_demand.csv", index=False)
    pd.DataFrame(tables["forecast"]).to_csv(out / "forecasted_demand.csv", index=False)
    pd.DataFrame(tables["weather"]).to_csv(out / "weather.csv", index=False)

    counts = {name: len(rows) for name, rows in tables.items()}
    logger.info("datagen.completed", out_dir=str(out), **counts)
    return counts


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic demand dashboard data")
    parser.add_argument("--out", default="data", help="directory for the CSV files")
    args = parser.parse_args(argv)
    configure_logging()
    generate(args.out)


if __name__ == "__main__":
    main()
