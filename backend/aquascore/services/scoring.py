from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass

from aquascore.core.config import settings
from aquascore.services.metrics import BASE_METRICS, METRIC_LABELS, METRIC_UNITS, ChemicalMetric, WaterAnalysisValues
from aquascore.services.profile_targets import (
    TargetRange,
    get_metric_weight,
    get_target_range,
    resolve_profile,
)


@dataclass(frozen=True)
class MetricScore:
    metric: ChemicalMetric
    score: float
    raw_value: float
    weight: float
    explanation: str


@dataclass(frozen=True)
class ScoreResult:
    profile: str
    total_score: float
    metrics: tuple[MetricScore, ...]
    low_data: bool
    missing_metrics: tuple[ChemicalMetric, ...]

    def metric_scores(self) -> dict[str, float]:
        return {item.metric: item.score for item in self.metrics}


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def score_against_target(value: float, target: TargetRange) -> float:
    """100 inside the optimal window, 0 outside [min, max], linear in between."""
    if target.is_optimal(value):
        return 100.0
    if value < target.min or value > target.max:
        return 0.0
    if value < target.optimal_min:
        return clamp_score(100.0 * (value - target.min) / (target.optimal_min - target.min))
    return clamp_score(100.0 * (target.max - value) / (target.max - target.optimal_max))


def _format_number(value: float) -> str:
    return f"{value:g}".replace(".", ",")


def _explain(metric: ChemicalMetric, value: float, target: TargetRange, score: float) -> str:
    label = METRIC_LABELS[metric]
    unit = METRIC_UNITS[metric]
    window = f"{_format_number(target.optimal_min)}–{_format_number(target.optimal_max)}"
    if unit:
        window = f"{window} {unit}"

    if score >= 100:
        return f"{label} liegt im idealen Bereich ({window})."
    if score <= 0:
        return f"{label} liegt deutlich außerhalb des empfohlenen Bereichs (ideal: {window})."
    if value < target.optimal_min:
        return f"{label} liegt etwas unter dem idealen Bereich ({window})."
    return f"{label} liegt etwas über dem idealen Bereich ({window})."


def calculate_scores(
    values: WaterAnalysisValues | Mapping[str, object] | None,
    profile: str | None,
    *,
    low_data_threshold: int | None = None,
    low_data_cap: float | None = None,
) -> ScoreResult:
    if not isinstance(values, WaterAnalysisValues):
        values = WaterAnalysisValues.from_mapping(values)

    profile_definition = resolve_profile(profile)
    threshold = settings.low_data_metric_threshold if low_data_threshold is None else low_data_threshold
    cap = settings.low_data_score_cap if low_data_cap is None else low_data_cap

    metrics: list[MetricScore] = []
    weighted: list[tuple[float, float]] = []
    missing: list[ChemicalMetric] = []
    for metric in BASE_METRICS:
        value = values.get(metric)
        if value is None or not math.isfinite(value):
            missing.append(metric)
            continue

        target = get_target_range(profile_definition.id, metric)
        if target is None:
            continue

        score = score_against_target(value, target)
        weight = get_metric_weight(profile_definition.id, metric)
        weighted.append((score, weight))
        metrics.append(
            MetricScore(
                metric=metric,
                score=round(score, 1),
                raw_value=value,
                weight=weight,
                explanation=_explain(metric, value, target, score),
            )
        )

    # Aggregate unrounded scores; rounding is for display only.
    weight_sum = sum(weight for _, weight in weighted)
    total = sum(score * weight for score, weight in weighted) / weight_sum if weight_sum > 0 else 0.0

    low_data = len(metrics) <= threshold
    if low_data:
        total = min(total, cap)

    return ScoreResult(
        profile=profile_definition.id,
        total_score=round(clamp_score(total), 1),
        metrics=tuple(metrics),
        low_data=low_data,
        missing_metrics=tuple(missing),
    )
