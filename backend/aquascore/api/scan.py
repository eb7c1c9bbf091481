from datetime import datetime, timezone
from uuid import uuid4

from fastapi import APIRouter, HTTPException, status

from aquascore.schemas.scan import (
    DerivedMetricsRead,
    MetricScoreRead,
    OcrScanRequest,
    ProductInfoRead,
    ProfileScoreRead,
    ScanResultRead,
    ScoreComparisonResponse,
    ScoreRequest,
    WaterInsightsRead,
)
from aquascore.services.scan_processor import ScanOutcome, process_scan
from aquascore.services.scan_stats import scan_stats_tracker
from aquascore.services.scoring import ScoreResult, calculate_scores
from aquascore.services.value_validator import validate_values

router = APIRouter(prefix="/scan", tags=["scan"])


def _metric_details(score: ScoreResult) -> list[MetricScoreRead]:
    return [MetricScoreRead.model_validate(item) for item in score.metrics]


def _product_info(payload: OcrScanRequest) -> ProductInfoRead | None:
    if not (payload.brand or payload.product_name or payload.barcode):
        return None
    return ProductInfoRead(
        brand=payload.brand,
        product_name=payload.product_name or payload.brand,
        barcode=payload.barcode,
    )


def _to_scan_read(payload: OcrScanRequest, outcome: ScanOutcome) -> ScanResultRead:
    return ScanResultRead(
        id=str(uuid4()),
        timestamp=datetime.now(timezone.utc),
        profile=outcome.profile,
        barcode=payload.barcode,
        product_info=_product_info(payload),
        confidence=payload.confidence,
        ocr_text_raw=payload.text or None,
        ocr_parsed_values=outcome.ocr_parsed_values.present(),
        user_overrides=outcome.user_overrides.present() if outcome.user_overrides is not None else None,
        score=outcome.score.total_score,
        low_data=outcome.score.low_data,
        missing_metrics=list(outcome.score.missing_metrics),
        metric_scores=outcome.score.metric_scores(),
        metric_details=_metric_details(outcome.score),
        derived_metrics=DerivedMetricsRead.model_validate(outcome.derived),
        insights=WaterInsightsRead.model_validate(outcome.insights),
        warnings=list(outcome.warnings) or None,
    )


@router.post("/ocr", response_model=ScanResultRead)
def scan_label(payload: OcrScanRequest) -> ScanResultRead:
    overrides = payload.values.to_values() if payload.values is not None else None
    outcome = process_scan(text=payload.text, profile=payload.profile, overrides=overrides)

    if not outcome.has_values:
        scan_stats_tracker.record_rejected()
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Es konnten keine Wasserwerte erkannt werden.",
        )

    scan_stats_tracker.record_scan(
        profile=outcome.profile,
        score=outcome.score.total_score,
        low_data=outcome.score.low_data,
        warning_count=len(outcome.warnings),
        parsed_metrics=list(outcome.ocr_parsed_values.present()),
        from_text=bool(payload.text),
    )
    return _to_scan_read(payload, outcome)


@router.post("/score", response_model=ScoreComparisonResponse)
def score_values(payload: ScoreRequest) -> ScoreComparisonResponse:
    values = payload.values.to_values()
    if values.is_empty():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Es müssen Werte übergeben werden.",
        )

    results: list[ProfileScoreRead] = []
    for profile in dict.fromkeys(payload.profiles):
        score = calculate_scores(values, profile)
        results.append(
            ProfileScoreRead(
                profile=score.profile,
                score=score.total_score,
                low_data=score.low_data,
                metric_details=_metric_details(score),
            )
        )

    warnings = validate_values(values)
    return ScoreComparisonResponse(values=values.present(), results=results, warnings=warnings or None)
