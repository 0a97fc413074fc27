# ============================================================================
# RUN SUMMARY
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Core model - Aggregated outcome of one probe run
# PURPOSE: Count outcomes per status for logging and the trigger response
# LAST_REVIEWED: 13 OCT 2026
# EXPORTS: RunSummary
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Run Summary

Aggregated view of a completed run, logged once at the end of the
invocation. Not sent to the metrics sink (the sink gets raw results).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from core.contracts import ProbeStatus, ReportStatus
from core.models.probe import ProbeResult, _iso_utc


@dataclass
class RunSummary:
    """Aggregated result of one probe run."""
    run_name: str
    asset_id: Optional[str]
    counts: Dict[ProbeStatus, int]
    total_duration_ms: float
    report_status: ReportStatus = ReportStatus.NOT_ATTEMPTED
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_results(
        cls,
        run_name: str,
        asset_id: Optional[str],
        results: List[ProbeResult],
        total_duration_ms: float,
        report_status: ReportStatus,
        started_at: Optional[datetime] = None,
    ) -> "RunSummary":
        """Count results per status (every status present, zero if unseen)."""
        counts = {status: 0 for status in ProbeStatus}
        for result in results:
            counts[result.status] += 1

        summary = cls(
            run_name=run_name,
            asset_id=asset_id,
            counts=counts,
            total_duration_ms=total_duration_ms,
            report_status=report_status,
        )
        if started_at is not None:
            summary.started_at = started_at
        return summary

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def healthy_ratio(self) -> float:
        """Share of probes that succeeded (0.0 for an empty run)."""
        if not self.total:
            return 0.0
        return self.counts[ProbeStatus.SUCCESS] / self.total

    def counts_line(self) -> str:
        """e.g. "success=3 failure=1 timeout=0"."""
        return " ".join(f"{status.value}={count}" for status, count in self.counts.items())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "run_name": self.run_name,
            "asset_id": self.asset_id,
            "total": self.total,
            "counts": {status.value: count for status, count in self.counts.items()},
            "healthy_ratio": round(self.healthy_ratio, 3),
            "report_status": self.report_status.value,
            "total_duration_ms": round(self.total_duration_ms, 2),
            "started_at": _iso_utc(self.started_at),
        }


__all__ = ["RunSummary"]
