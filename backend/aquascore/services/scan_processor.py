from __future__ import annotations

import logging
from dataclasses import dataclass

from aquascore.services.derived_metrics import DerivedMetrics, derive_metrics
from aquascore.services.label_parser import parse_text_to_analysis
from aquascore.services.metrics import WaterAnalysisValues
from aquascore.services.scoring import ScoreResult, calculate_scores
from aquascore.services.value_validator import validate_values
from aquascore.services.water_insights import WaterInsights, derive_water_insights

logger = logging.getLogger("aquascore.scan")


@dataclass(frozen=True)
class ScanOutcome:
    profile: str
    ocr_parsed_values: WaterAnalysisValues
    user_overrides: WaterAnalysisValues | None
    merged_values: WaterAnalysisValues
    score: ScoreResult
    warnings: tuple[str, ...]
    derived: DerivedMetrics
    insights: WaterInsights

    @property
    def has_values(self) -> bool:
        return not self.merged_values.is_empty()


def merge_values(
    ocr_parsed_values: WaterAnalysisValues,
    user_overrides: WaterAnalysisValues | None,
) -> WaterAnalysisValues:
    return ocr_parsed_values.merged_with(user_overrides)


def process_scan(
    *,
    text: str | None,
    profile: str,
    overrides: WaterAnalysisValues | None = None,
) -> ScanOutcome:
    ocr_parsed = parse_text_to_analysis(text) if text else WaterAnalysisValues()
    merged = merge_values(ocr_parsed, overrides)
    warnings = validate_values(merged)
    score = calculate_scores(merged, profile)

    logger.info(
        "scan processed profile=%s parsed=%d merged=%d warnings=%d score=%.1f low_data=%s",
        score.profile,
        ocr_parsed.count_present(),
        merged.count_present(),
        len(warnings),
        score.total_score,
        score.low_data,
    )

    return ScanOutcome(
        profile=score.profile,
        ocr_parsed_values=ocr_parsed,
        user_overrides=overrides,
        merged_values=merged,
        score=score,
        warnings=tuple(warnings),
        derived=derive_metrics(merged),
        insights=derive_water_insights(merged),
    )
