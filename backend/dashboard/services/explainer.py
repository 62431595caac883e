# dashboard/services/explainer.py
"""
Canned deviation explanations.

A small decision tree over the deviation sign and size, the recorded temperature and the
weekday produces a list of text chunks. The chunks are streamed one by one by the
/api/explain route, so each one ends where a reader could pause.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date as date_cls
from typing import List, Optional

from dashboard.models import REGION_NAMES, Region


@dataclass(frozen=True)
class ExplainParams:
    date: str
    actual: Optional[float]
    predicted: Optional[float]
    state: str
    temperature: Optional[float] = None
    is_comparison_point: bool = False
    comparison_predicted: Optional[float] = None
    days_difference: Optional[int] = None


def state_name(code: str) -> str:
    try:
        return REGION_NAMES[Region.parse(code)]
    except ValueError:
        return code


def _num(value: float) -> str:
    """Render 28.0 as '28' and 28.5 as '28.5'."""
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _mwh(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def _is_weekend(day: str) -> bool:
    try:
        return date_cls.fromisoformat(day).weekday() >= 5
    except ValueError:
        return False


def generate_explanation(params: ExplainParams) -> List[str]:
    name = state_name(params.state)

    if params.is_comparison_point and params.comparison_predicted is not None:
        return _comparison_explanation(params, name)

    if params.predicted is None or params.predicted == 0:
        return [
            f"No forecast baseline is available for {params.date} in {name}, ",
            "so the deviation cannot be expressed as a percentage.",
        ]
    if params.actual is None:
        return [
            f"No actual demand has been recorded for {params.date} in {name} yet. ",
            f"The forecast for this date is {_mwh(params.predicted)} MWh.",
        ]

    actual, predicted, temperature = params.actual, params.predicted, params.temperature
    deviation = (actual - predicted) / predicted * 100
    pct = f"{abs(deviation):.1f}"
    higher = deviation > 0

    if higher and temperature is not None and temperature < 32:
        return [
            f"On {params.date}, electricity demand in {name} exceeded the forecast by {pct}%. ",
            f"The primary driver was an unexpected cold front that dropped temperatures to {_num(temperature)}°F, ",
            "significantly below the forecasted range. ",
            "This led to a sharp increase in heating load across residential and commercial sectors. ",
            "The forecast model did not account for this sudden temperature drop, ",
            f"resulting in an underestimation of {_mwh(actual - predicted)} MWh. ",
            f"Similar cold-snap events in {name} have historically caused demand spikes of 15-25% above baseline.",
        ]

    if higher and _is_weekend(params.date):
        return [
            f"Demand on {params.date} was {pct}% higher than predicted. ",
            "This is notable as it occurred on a weekend, when demand is typically lower. ",
            "The deviation suggests an unusual event, possibly a major sporting event, ",
            "a holiday weekend with increased residential usage, ",
            "or an industrial facility running extended operations. ",
            f"Weekend forecast models in {name} may need recalibration to better capture these periodic anomalies.",
        ]

    if higher:
        cold = temperature is not None and temperature < 45
        return [
            f"Actual demand on {params.date} exceeded the forecast by {pct}% in {name}. ",
            "This could be attributed to a combination of factors: ",
            (
                f"The recorded temperature of {_num(temperature)}°F was {'colder' if cold else 'warmer'} than expected, "
                if temperature is not None
                else "Temperature conditions differed from predictions, "
            ),
            f"leading to {'increased heating' if cold else 'increased cooling'} demand. ",
            "Additionally, economic activity indicators suggest higher-than-normal industrial consumption during this period.",
        ]

    if temperature is not None and temperature > 60:
        return [
            f"Demand on {params.date} was {pct}% lower than the forecast. ",
            f"Milder-than-expected temperatures of {_num(temperature)}°F reduced heating requirements across {name}. ",
            "The forecast model had predicted cooler conditions, leading to an overestimation of heating load. ",
            "This pattern is consistent with the seasonal transition period where temperature forecast errors ",
            "have an amplified effect on demand predictions.",
        ]

    return [
        f"On {params.date}, demand in {name} was {pct}% {'above' if higher else 'below'} forecast. ",
        f"The deviation of {_mwh(abs(actual - predicted))} MWh falls outside the model's 10% confidence band. ",
        f"With a recorded temperature of {_num(temperature)}°F, " if temperature is not None else "Given the weather conditions, ",
        "the primary factors likely include changes in industrial load patterns, ",
        "distributed energy resource generation variability, ",
        "and potential shifts in consumer behavior. ",
        "Ongoing model tuning should improve accuracy for similar conditions.",
    ]


def _comparison_explanation(params: ExplainParams, name: str) -> List[str]:
    primary = params.predicted
    comparison = params.comparison_predicted
    days = params.days_difference or 0
    plural = "" if days == 1 else "s"

    chunks = [f"Comparing two forecasts for {params.date} in {name}, separated by {days} day{plural}: "]

    if not primary:
        chunks.append(
            f"The primary forecast has no usable baseline for this date, so the comparison forecast of "
            f"{_mwh(comparison)} MWh cannot be expressed as a relative difference. "
        )
        return chunks

    diff = comparison - primary
    abs_pct = abs(diff / primary * 100)
    pct = f"{abs_pct:.1f}"
    direction = "higher" if diff > 0 else "lower"

    if abs_pct > 10:
        chunks += [
            f"The comparison forecast diverges significantly from the primary forecast by {pct}% ",
            f"({direction} by {_mwh(abs(diff))} MWh). ",
            f"This large discrepancy over {days} days suggests a fundamental shift in the model's input data, ",
            "likely driven by updated weather forecasts, revised demand baselines, or changes in generation capacity assumptions. ",
        ]
    elif abs_pct > 5:
        chunks += [
            f"The comparison forecast is {pct}% {direction} than the primary forecast ",
            f"(a difference of {_mwh(abs(diff))} MWh). ",
            f"With {days} days between forecast runs, this moderate divergence is typically caused by ",
            "evolving weather predictions, updated industrial load schedules, or revised renewable generation estimates. ",
        ]
    else:
        chunks += [
            f"The two forecasts differ by {pct}% ",
            f"({_mwh(abs(diff))} MWh {direction} in the comparison). ",
            f"This is within normal forecast variation for a {days}-day gap between model runs. ",
        ]

    temperature = params.temperature
    if temperature is not None:
        if temperature < 35:
            tail = "indicates cold weather conditions that amplify forecast sensitivity to heating load estimates. "
        elif temperature > 85:
            tail = "indicates hot weather conditions where cooling demand creates additional forecast uncertainty. "
        else:
            tail = "is within moderate ranges, suggesting temperature was not the primary driver of divergence. "
        chunks += [f"The recorded temperature of {_num(temperature)}°F on this date ", tail]

    chunks += [
        f"As forecast lead time increases, prediction uncertainty grows. The {days}-day gap means the earlier forecast ",
        "had less accurate input data, which naturally leads to this level of divergence.",
    ]
    return chunks


__all__ = ["ExplainParams", "generate_explanation", "state_name"]
