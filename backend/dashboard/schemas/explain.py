from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import Field

from dashboard.schemas.demand import CamelModel
from dashboard.services.explainer import ExplainParams


class ExplainRequest(CamelModel):
    date: Date
    actual: Optional[float] = None
    predicted: Optional[float] = None
    state: str = Field("TX", min_length=2, max_length=2)
    temperature: Optional[float] = None
    is_comparison_point: bool = False
    comparison_predicted: Optional[float] = None
    days_difference: Optional[int] = None

    def to_params(self) -> ExplainParams:
        return ExplainParams(
            date=self.date.isoformat(),
            actual=self.actual,
            predicted=self.predicted,
            state=self.state.upper(),
            temperature=self.temperature,
            is_comparison_point=self.is_comparison_point,
            comparison_predicted=self.comparison_predicted,
            days_difference=self.days_difference,
        )
