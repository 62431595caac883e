from __future__ import annotations

import pandas as pd

from dashboard.datagen import END_DATE, START_DATE, TODAY, generate, main
from dashboard.models import ENERGY_SOURCES
from dashboard.services.repository import FORECAST_COLUMNS, HISTORICAL_COLUMNS, WEATHER_COLUMNS, DemandRepository

DAYS = (END_DATE - START_DATE).days + 1
HISTORICAL_DAYS = (TODAY - START_DATE).days + 1


def test_generate_writes_three_tables(tmp_path):
    counts = generate(tmp_path)
    assert counts == {
        "historical": HISTORICAL_DAYS * 4 * 5,
        "forecast": DAYS * 4 * 5,
        "weather": DAYS * 5,
    }

    historical = pd.read_csv(tmp_path / "historical_demand.csv", dtype=str)
    forecast = pd.read_csv(tmp_path / "forecasted_demand.csv", dtype=str)
    weather = pd.read_csv(tmp_path / "weather.csv", dtype=str)
    assert list(historical.columns) == HISTORICAL_COLUMNS
    assert list(forecast.columns) == FORECAST_COLUMNS
    assert list(weather.columns) == WEATHER_COLUMNS

    assert historical["Date"].max() == TODAY.isoformat()
    assert forecast["PredictedDate"].max() == END_DATE.isoformat()
    assert sorted(historical["EnergySource"].unique()) == sorted(ENERGY_SOURCES)
    assert sorted(historical["Region"].unique()) == ["CA", "FL", "IL", "NY", "TX"]


def test_forecast_vintages_precede_predicted_dates(tmp_path):
    generate(tmp_path)
    forecast = pd.read_csv(tmp_path / "forecasted_demand.csv", dtype=str)
    assert (forecast["DateOfPrediction"] < forecast["PredictedDate"]).all()

    future = forecast[forecast["PredictedDate"] > TODAY.isoformat()]
    assert set(future["DateOfPrediction"]) == {TODAY.isoformat()}


def test_output_is_deterministic_and_readable(tmp_path):
    generate(tmp_path / "a")
    main(["--out", str(tmp_path / "b")])
    a = (tmp_path / "a" / "historical_demand.csv").read_text(encoding="utf-8")
    b = (tmp_path / "b" / "historical_demand.csv").read_text(encoding="utf-8")
    assert a == b

    repo = DemandRepository(tmp_path / "a")
    assert len(repo.historical("TX", TODAY.isoformat(), TODAY.isoformat())) == 4
