# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Foundation - Core enums shared by models and components
# PURPOSE: Define probe status, content object kinds and report status
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: ProbeStatus, ContentObjectKind, ReportStatus
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the edge probe.

These enums cross every boundary of a run:
- GraphQL (catalog response -> typed snapshot)
- Python (resolver, executor, coordinator)
- JSON (metrics sink payload)
"""

from enum import Enum


# ============================================================================
# STATUS ENUMS
# ============================================================================

class ProbeStatus(str, Enum):
    """
    Outcome discriminant of a single probe.

    Values are the literal strings the metrics sink expects.
    """
    SUCCESS = "success"          # 2xx before the deadline
    FAILURE = "failure"          # Non-2xx, or transport error (no status)
    TIMEOUT = "timeout"          # Deadline hit, request cancelled

    def is_healthy(self) -> bool:
        """Check if the probed endpoint served the asset."""
        return self is ProbeStatus.SUCCESS


class ContentObjectKind(str, Enum):
    """Which content object of an asset a target belongs to."""
    MEDIA = "media"
    THUMBNAIL = "thumbnail"


class ReportStatus(str, Enum):
    """
    Delivery state of the metrics report for a run.

    None of these abort the run; they are recorded on the summary.
    """
    SENT = "sent"
    SINK_UNCONFIGURED = "sink_unconfigured"
    DELIVERY_FAILED = "delivery_failed"
    NOT_ATTEMPTED = "not_attempted"


__all__ = [
    "ProbeStatus",
    "ContentObjectKind",
    "ReportStatus",
]
