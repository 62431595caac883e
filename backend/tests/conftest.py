import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure backend/ is importable as the top-level "dashboard" package even when pytest runs from repo root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from dashboard.config import Settings
from dashboard.main import create_app
from dashboard.services.repository import DemandRepository

HISTORICAL_CSV = """Date,Region,Value,UnitOfMeasure,Source,EnergySource
2026-02-10,TX,600,MWh,ERCOT,Gas
2026-02-10,TX,400,MWh,ERCOT,Wind
2026-02-11,TX,600,MWh,ERCOT,Gas
2026-02-11,TX,400,MWh,ERCOT,Wind
2026-02-12,TX,700,MWh,ERCOT,Gas
2026-02-12,TX,500,MWh,ERCOT,Wind
2026-02-13,TX,600,MWh,ERCOT,Gas
2026-02-13,TX,400,MWh,ERCOT,Wind
2026-02-14,TX,999,MWh,ERCOT,Gas
2026-02-14,TX,1,MWh,ERCOT,Wind
2026-02-10,CA,5000,MWh,CAISO,Gas
"""

FORECAST_CSV = """DateOfPrediction,PredictedDate,Region,Value,UnitOfMeasure,EnergySource
2026-02-09,2026-02-10,TX,600,MWh,Gas
2026-02-09,2026-02-10,TX,400,MWh,Wind
2026-02-09,2026-02-11,TX,500,MWh,Gas
2026-02-09,2026-02-11,TX,400,MWh,Wind
2026-02-10,2026-02-12,TX,600,MWh,Gas
2026-02-10,2026-02-12,TX,350,MWh,Wind
2026-02-10,2026-02-13,TX,560,MWh,Gas
2026-02-10,2026-02-13,TX,400,MWh,Wind
2026-02-10,2026-02-14,TX,560,MWh,Gas
2026-02-10,2026-02-14,TX,380,MWh,Wind
2026-02-10,2026-02-15,TX,600,MWh,Gas
2026-02-10,2026-02-15,TX,390,MWh,Wind
2026-02-13,2026-02-12,TX,600,MWh,Gas
2026-02-13,2026-02-12,TX,400,MWh,Wind
2026-02-13,2026-02-13,TX,550,MWh,Gas
2026-02-13,2026-02-13,TX,450,MWh,Wind
2026-02-13,2026-02-14,TX,600,MWh,Gas
2026-02-13,2026-02-14,TX,400,MWh,Wind
2026-02-13,2026-02-15,TX,600,MWh,Gas
2026-02-13,2026-02-15,TX,400,MWh,Wind
2026-02-13,2026-02-14,CA,4000,MWh,Gas
"""

WEATHER_CSV = """Date,Region,Temperature,WindSpeed,Humidity
2026-02-10,TX,30,10,60
2026-02-11,TX,31,11,61
2026-02-12,TX,40,12,62
2026-02-13,TX,41,13,63
2026-02-14,TX,50,14,64
2026-02-15,TX,51,15,65
2026-02-10,CA,60,5,40
"""


def write_fixture_csvs(target: Path) -> Path:
    target.mkdir(parents=True, exist_ok=True)
    (target / "historical_demand.csv").write_text(HISTORICAL_CSV, encoding="utf-8")
    (target / "forecasted_demand.csv").write_text(FORECAST_CSV, encoding="utf-8")
    (target / "weather.csv").write_text(WEATHER_CSV, encoding="utf-8")
    return target


@pytest.fixture(scope="function")
def data_dir(tmp_path):
    return write_fixture_csvs(tmp_path / "data")


@pytest.fixture(scope="function")
def repo(data_dir):
    return DemandRepository(data_dir)


@pytest.fixture(scope="function")
def settings(data_dir):
    return Settings(
        ENV="test",
        DATA_DIR=str(data_dir),
        EXPLAIN_DELAY_MIN_MS=0,
        EXPLAIN_DELAY_MAX_MS=0,
    )


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as c:
        yield c
