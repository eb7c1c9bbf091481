from datetime import datetime

from pydantic import BaseModel


class ProfileStatsRead(BaseModel):
    profile: str
    scans: int
    avg_score: float
    low_data_scans: int
    warnings: int


class ScanStatsResponse(BaseModel):
    generated_at: datetime
    uptime_seconds: int
    total_requests: int
    failed_requests: int
    total_scans: int
    text_scans: int
    rejected_scans: int
    parsed_metric_hits: dict[str, int]
    profiles: list[ProfileStatsRead]
