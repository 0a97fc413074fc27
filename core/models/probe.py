# ============================================================================
# PROBE MODELS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Core model - Run-scoped probe targets and results
# PURPOSE: Describe what gets probed and how each probe ended
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: ProbeTarget, ProbeSuccess, ProbeFailure, ProbeTimeout,
#          ProbeOutcome, ProbeResult
# DEPENDENCIES: pydantic
# ============================================================================
"""
Probe Models

ProbeTarget is derived from the catalog snapshot by the resolver.
ProbeResult pairs a target with exactly one outcome variant:

    success  -> latency_ms
    failure  -> status_code (None for transport errors)
    timeout  -> no payload

Results are frozen: the outcome is assigned once at construction.

Metrics record format (camelCase, one per result):
{
    "dataObjectId": "123",
    "dataObjectType": "media",
    "distributionBucketId": "0:1",
    "workerId": 4,
    "nodeEndpoint": "https://node.example.com/distributor/",
    "region": "eastus",
    "url": "https://node.example.com/distributor/api/v1/assets/123",
    "time": "2026-10-12T08:00:00.000000Z",
    "status": "success",
    "responseTime": 182.41
}
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

from core.contracts import ContentObjectKind, ProbeStatus


def _iso_utc(value: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================================
# TARGET
# ============================================================================

class ProbeTarget(BaseModel):
    """
    One (content object, bucket, operator, endpoint) tuple to check.

    Only built for operators that publish a non-empty endpoint.
    """

    data_object_id: str = Field(..., description="Content object id")
    data_object_kind: Optional[ContentObjectKind] = Field(
        default=None,
        description="media or thumbnail",
    )
    distribution_bucket_id: str
    worker_id: int
    node_endpoint: str = Field(..., min_length=1)
    region: Optional[str] = Field(default=None, description="Invocation region tag")

    model_config = {"frozen": True}

    def to_record(self) -> Dict[str, Any]:
        """Target fields in metrics-sink naming."""
        record: Dict[str, Any] = {
            "dataObjectId": self.data_object_id,
            "distributionBucketId": self.distribution_bucket_id,
            "workerId": self.worker_id,
            "nodeEndpoint": self.node_endpoint,
        }
        if self.data_object_kind is not None:
            record["dataObjectType"] = self.data_object_kind.value
        if self.region:
            record["region"] = self.region
        return record


# ============================================================================
# OUTCOMES
# ============================================================================

class ProbeSuccess(BaseModel):
    """Endpoint answered 2xx before the deadline."""

    status: Literal["success"] = "success"
    latency_ms: float = Field(..., ge=0)

    model_config = {"frozen": True}


class ProbeFailure(BaseModel):
    """Non-2xx response, or a transport error with no status."""

    status: Literal["failure"] = "failure"
    status_code: Optional[int] = None

    model_config = {"frozen": True}


class ProbeTimeout(BaseModel):
    """Deadline exceeded; the request was cancelled."""

    status: Literal["timeout"] = "timeout"

    model_config = {"frozen": True}


ProbeOutcome = Annotated[
    Union[ProbeSuccess, ProbeFailure, ProbeTimeout],
    Field(discriminator="status"),
]


# ============================================================================
# RESULT
# ============================================================================

class ProbeResult(BaseModel):
    """Classified outcome of checking one probe target."""

    target: ProbeTarget
    time: datetime = Field(..., description="UTC time the probe was dispatched")
    url: str
    outcome: ProbeOutcome

    model_config = {"frozen": True}

    @property
    def status(self) -> ProbeStatus:
        return ProbeStatus(self.outcome.status)

    def summary_line(self) -> str:
        """One-line human summary used for per-result run logging."""
        outcome = self.outcome
        if isinstance(outcome, ProbeSuccess):
            return f"{self.url} - success - {outcome.latency_ms:.0f}ms"
        if isinstance(outcome, ProbeTimeout):
            return f"{self.url} - timeout"
        return f"{self.url} - failure - {outcome.status_code}"

    def to_record(self) -> Dict[str, Any]:
        """Flatten to the JSON record the metrics sink ingests."""
        record = self.target.to_record()
        record["url"] = self.url
        record["time"] = _iso_utc(self.time)
        record["status"] = self.outcome.status

        if isinstance(self.outcome, ProbeSuccess):
            record["responseTime"] = round(self.outcome.latency_ms, 2)
        elif isinstance(self.outcome, ProbeFailure):
            record["statusCode"] = self.outcome.status_code

        return record


__all__ = [
    "ProbeTarget",
    "ProbeSuccess",
    "ProbeFailure",
    "ProbeTimeout",
    "ProbeOutcome",
    "ProbeResult",
]
