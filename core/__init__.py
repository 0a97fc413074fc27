# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Core module initialization
# PURPOSE: Export core contracts, errors and models
# LAST_REVIEWED: 13 OCT 2026
# ============================================================================

from core.contracts import ProbeStatus, ContentObjectKind, ReportStatus
from core.errors import ProbeRunError, CatalogUnavailable, NoCandidateAsset
from core.models import (
    Asset,
    ContentObject,
    DistributionBucket,
    Operator,
    ProbeTarget,
    ProbeResult,
    RunSummary,
)

__all__ = [
    # Enums
    "ProbeStatus",
    "ContentObjectKind",
    "ReportStatus",
    # Errors
    "ProbeRunError",
    "CatalogUnavailable",
    "NoCandidateAsset",
    # Models
    "Asset",
    "ContentObject",
    "DistributionBucket",
    "Operator",
    "ProbeTarget",
    "ProbeResult",
    "RunSummary",
]
