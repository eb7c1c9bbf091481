from fastapi import APIRouter

from aquascore.schemas.reference import MetricListResponse, MetricRead
from aquascore.services.metrics import BASE_METRICS, DERIVED_METRICS, METRIC_LABELS, METRIC_UNITS
from aquascore.services.value_validator import PLAUSIBLE_RANGES

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("", response_model=MetricListResponse)
def list_metrics() -> MetricListResponse:
    items: list[MetricRead] = []
    for metric in BASE_METRICS:
        plausible = PLAUSIBLE_RANGES[metric]
        items.append(
            MetricRead(
                key=metric,
                label=METRIC_LABELS[metric],
                unit=METRIC_UNITS[metric],
                derived=False,
                plausible_min=plausible.min,
                plausible_max=plausible.max,
                typical=plausible.typical,
            )
        )
    for metric in DERIVED_METRICS:
        items.append(MetricRead(key=metric, label=METRIC_LABELS[metric], unit=METRIC_UNITS[metric], derived=True))
    return MetricListResponse(count=len(items), items=items)
