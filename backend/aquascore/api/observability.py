from fastapi import APIRouter

from aquascore.schemas.observability import ScanStatsResponse
from aquascore.services.scan_stats import scan_stats_tracker

router = APIRouter(prefix="/observability", tags=["observability"])


@router.get("/scan-stats", response_model=ScanStatsResponse)
def get_scan_stats() -> ScanStatsResponse:
    return ScanStatsResponse(**scan_stats_tracker.snapshot())
