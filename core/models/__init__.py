# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Model exports
# PURPOSE: Central export point for all models
# LAST_REVIEWED: 13 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Catalog snapshot records (read-only, fetched each run), run-scoped
probe targets/results, and the aggregated run summary.
"""

from core.models.catalog import (
    Asset,
    ContentObject,
    StorageBag,
    BucketBinding,
    DistributionBucket,
    Operator,
    NodeMetadata,
)
from core.models.probe import (
    ProbeTarget,
    ProbeSuccess,
    ProbeFailure,
    ProbeTimeout,
    ProbeOutcome,
    ProbeResult,
)
from core.models.summary import RunSummary

__all__ = [
    # Catalog
    "Asset",
    "ContentObject",
    "StorageBag",
    "BucketBinding",
    "DistributionBucket",
    "Operator",
    "NodeMetadata",
    # Probe
    "ProbeTarget",
    "ProbeSuccess",
    "ProbeFailure",
    "ProbeTimeout",
    "ProbeOutcome",
    "ProbeResult",
    # Summary
    "RunSummary",
]
