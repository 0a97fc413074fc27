# ============================================================================
# MODEL TESTS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Tests - Catalog snapshot and probe result models
# PURPOSE: Verify GraphQL payload validation and metrics record format
# CREATED: 13 OCT 2026
# ============================================================================
"""
Model Tests

Covers:
1. Asset validates straight from a camelCase GraphQL payload
2. Absent optionals (thumbnail, metadata, nodeEndpoint) stay None
3. Operator.node_endpoint treats empty strings as absent
4. ProbeResult is frozen and serializes one outcome variant
5. RunSummary counts every status

Run with:
    pytest tests/test_models.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.contracts import ContentObjectKind, ProbeStatus, ReportStatus
from core.models import (
    Asset,
    Operator,
    ProbeFailure,
    ProbeResult,
    ProbeSuccess,
    ProbeTarget,
    ProbeTimeout,
    RunSummary,
)


def _video_payload():
    return {
        "id": "A1",
        "media": {
            "id": "M1",
            "storageBag": {
                "distributionBuckets": [
                    {
                        "distributionBucket": {
                            "id": "B1",
                            "distributing": True,
                            "operators": [
                                {"workerId": 1, "metadata": {"nodeEndpoint": "https://node1/"}},
                                {"workerId": 2, "metadata": None},
                            ],
                        }
                    }
                ]
            },
        },
        "thumbnailPhoto": None,
    }


def _target(**overrides):
    fields = dict(
        data_object_id="M1",
        data_object_kind=ContentObjectKind.MEDIA,
        distribution_bucket_id="B1",
        worker_id=1,
        node_endpoint="https://node1/",
    )
    fields.update(overrides)
    return ProbeTarget(**fields)


def _result(outcome, **target_overrides):
    return ProbeResult(
        target=_target(**target_overrides),
        time=datetime(2026, 10, 12, 8, 0, 0, tzinfo=timezone.utc),
        url="https://node1/api/v1/assets/M1",
        outcome=outcome,
    )


# ============================================================================
# CATALOG SNAPSHOT
# ============================================================================

class TestCatalogModels:
    """GraphQL payload -> typed snapshot."""

    def test_validates_camel_case_payload(self):
        asset = Asset.model_validate(_video_payload())

        assert asset.id == "A1"
        assert asset.media.id == "M1"
        bucket = asset.media.storage_bag.distribution_buckets[0].distribution_bucket
        assert bucket.id == "B1"
        assert bucket.distributing is True
        assert [op.worker_id for op in bucket.operators] == [1, 2]

    def test_absent_optionals_are_none(self):
        asset = Asset.model_validate(_video_payload())

        assert asset.thumbnail_photo is None
        assert asset.is_probeable is False
        operator = asset.media.storage_bag.distribution_buckets[0].distribution_bucket.operators[1]
        assert operator.metadata is None
        assert operator.node_endpoint is None

    def test_empty_endpoint_is_absent(self):
        operator = Operator.model_validate({"workerId": 3, "metadata": {"nodeEndpoint": ""}})
        assert operator.node_endpoint is None

        operator = Operator.model_validate({"workerId": 4, "metadata": {"nodeEndpoint": None}})
        assert operator.node_endpoint is None

    def test_missing_worker_id_rejected(self):
        with pytest.raises(ValidationError):
            Operator.model_validate({"metadata": {"nodeEndpoint": "https://x/"}})

    def test_snapshot_is_frozen(self):
        asset = Asset.model_validate(_video_payload())
        with pytest.raises(ValidationError):
            asset.id = "other"


# ============================================================================
# PROBE RESULT
# ============================================================================

class TestProbeResult:
    """Outcome variants and metrics record format."""

    def test_target_requires_endpoint(self):
        with pytest.raises(ValidationError):
            _target(node_endpoint="")

    def test_success_record(self):
        record = _result(ProbeSuccess(latency_ms=182.4123)).to_record()

        assert record == {
            "dataObjectId": "M1",
            "dataObjectType": "media",
            "distributionBucketId": "B1",
            "workerId": 1,
            "nodeEndpoint": "https://node1/",
            "url": "https://node1/api/v1/assets/M1",
            "time": "2026-10-12T08:00:00Z",
            "status": "success",
            "responseTime": 182.41,
        }

    def test_failure_record_keeps_null_status_code(self):
        record = _result(ProbeFailure(status_code=None)).to_record()

        assert record["status"] == "failure"
        assert "statusCode" in record
        assert record["statusCode"] is None
        assert "responseTime" not in record

    def test_timeout_record_has_no_payload(self):
        record = _result(ProbeTimeout(), region="eastus").to_record()

        assert record["status"] == "timeout"
        assert record["region"] == "eastus"
        assert "statusCode" not in record
        assert "responseTime" not in record

    def test_outcome_is_immutable(self):
        result = _result(ProbeTimeout())
        with pytest.raises(ValidationError):
            result.outcome = ProbeSuccess(latency_ms=1.0)

    def test_negative_latency_rejected(self):
        with pytest.raises(ValidationError):
            ProbeSuccess(latency_ms=-1.0)

    def test_outcome_parsed_by_discriminator(self):
        result = ProbeResult.model_validate({
            "target": _target().model_dump(),
            "time": "2026-10-12T08:00:00Z",
            "url": "https://node1/api/v1/assets/M1",
            "outcome": {"status": "failure", "status_code": 503},
        })
        assert isinstance(result.outcome, ProbeFailure)
        assert result.outcome.status_code == 503
        assert result.status == ProbeStatus.FAILURE

    def test_summary_lines(self):
        assert _result(ProbeSuccess(latency_ms=50.2)).summary_line().endswith("success - 50ms")
        assert _result(ProbeTimeout()).summary_line().endswith(" - timeout")
        assert _result(ProbeFailure(status_code=404)).summary_line().endswith("failure - 404")


# ============================================================================
# RUN SUMMARY
# ============================================================================

class TestRunSummary:

    def test_counts_every_status(self):
        results = [
            _result(ProbeSuccess(latency_ms=10.0)),
            _result(ProbeSuccess(latency_ms=20.0)),
            _result(ProbeFailure(status_code=503)),
        ]
        summary = RunSummary.from_results(
            run_name="edge_probe",
            asset_id="A1",
            results=results,
            total_duration_ms=123.0,
            report_status=ReportStatus.SENT,
        )

        assert summary.total == 3
        assert summary.counts[ProbeStatus.SUCCESS] == 2
        assert summary.counts[ProbeStatus.FAILURE] == 1
        assert summary.counts[ProbeStatus.TIMEOUT] == 0
        assert summary.to_dict()["counts"] == {"success": 2, "failure": 1, "timeout": 0}
        assert summary.to_dict()["report_status"] == "sent"

    def test_empty_run_ratio(self):
        summary = RunSummary.from_results("r", "A1", [], 0.0, ReportStatus.SINK_UNCONFIGURED)
        assert summary.total == 0
        assert summary.healthy_ratio == 0.0
