from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock


@dataclass
class ProfileStats:
    profile: str
    scans: int = 0
    total_score: float = 0.0
    low_data_scans: int = 0
    warnings: int = 0

    def record(self, score: float, *, low_data: bool, warning_count: int) -> None:
        self.scans += 1
        self.total_score += score
        self.warnings += warning_count
        if low_data:
            self.low_data_scans += 1

    @property
    def avg_score(self) -> float:
        if self.scans == 0:
            return 0.0
        return self.total_score / self.scans


@dataclass
class _Counters:
    total_scans: int = 0
    text_scans: int = 0
    rejected_scans: int = 0
    total_requests: int = 0
    failed_requests: int = 0
    parsed_metric_hits: dict[str, int] = field(default_factory=dict)
    profiles: dict[str, ProfileStats] = field(default_factory=dict)


class ScanStatsTracker:
    """Process-local counters; shared between request threads, hence the lock."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._started_at = datetime.now(timezone.utc)
        self._counters = _Counters()

    def reset(self) -> None:
        with self._lock:
            self._started_at = datetime.now(timezone.utc)
            self._counters = _Counters()

    def record_request(self, *, status_code: int) -> None:
        with self._lock:
            self._counters.total_requests += 1
            if status_code >= 500:
                self._counters.failed_requests += 1

    def record_rejected(self) -> None:
        with self._lock:
            self._counters.rejected_scans += 1

    def record_scan(
        self,
        *,
        profile: str,
        score: float,
        low_data: bool,
        warning_count: int,
        parsed_metrics: list[str],
        from_text: bool,
    ) -> None:
        with self._lock:
            counters = self._counters
            counters.total_scans += 1
            if from_text:
                counters.text_scans += 1

            stats = counters.profiles.get(profile)
            if stats is None:
                stats = ProfileStats(profile=profile)
                counters.profiles[profile] = stats
            stats.record(score, low_data=low_data, warning_count=warning_count)

            for metric in parsed_metrics:
                counters.parsed_metric_hits[metric] = counters.parsed_metric_hits.get(metric, 0) + 1

    def snapshot(self) -> dict[str, object]:
        with self._lock:
            now = datetime.now(timezone.utc)
            counters = self._counters
            profiles = [
                {
                    "profile": stats.profile,
                    "scans": stats.scans,
                    "avg_score": round(stats.avg_score, 1),
                    "low_data_scans": stats.low_data_scans,
                    "warnings": stats.warnings,
                }
                for stats in sorted(counters.profiles.values(), key=lambda item: item.profile)
            ]

            return {
                "generated_at": now,
                "uptime_seconds": int((now - self._started_at).total_seconds()),
                "total_requests": counters.total_requests,
                "failed_requests": counters.failed_requests,
                "total_scans": counters.total_scans,
                "text_scans": counters.text_scans,
                "rejected_scans": counters.rejected_scans,
                "parsed_metric_hits": dict(sorted(counters.parsed_metric_hits.items())),
                "profiles": profiles,
            }


scan_stats_tracker = ScanStatsTracker()
