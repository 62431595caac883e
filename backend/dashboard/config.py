# dashboard/config.py
from functools import lru_cache
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # environment: "dev" for running the app locally, "test" for pytest
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # --- Data files (read-only CSV) ---
    DATA_DIR: str = "data"
    HISTORICAL_FILE: str = "historical_demand.csv"
    FORECAST_FILE: str = "forecasted_demand.csv"
    WEATHER_FILE: str = "weather.csv"

    # Last date with recorded actuals; actual rows after it are ignored.
    REAL_TODAY: str = "2026-02-13"

    # --- Query defaults ---
    DEFAULT_REGION: str = "TX"
    DEFAULT_START_DATE: str = "2026-01-17"
    DEFAULT_END_DATE: str = "2026-02-20"

    # --- Explanation streaming ---
    EXPLAIN_DELAY_MIN_MS: int = Field(80, ge=0)
    EXPLAIN_DELAY_MAX_MS: int = Field(200, ge=0)

    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    )

    @model_validator(mode="after")
    def _check_delay_range(self):
        if self.EXPLAIN_DELAY_MIN_MS > self.EXPLAIN_DELAY_MAX_MS:
            raise ValueError("EXPLAIN_DELAY_MIN_MS must not exceed EXPLAIN_DELAY_MAX_MS")
        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
