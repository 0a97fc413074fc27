# ============================================================================
# RUN COORDINATOR TESTS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Tests - End-to-end run sequencing
# PURPOSE: Verify abort-on-catalog-failure and the happy path summary
# CREATED: 14 OCT 2026
# ============================================================================
"""
Run Coordinator Tests

Catalog and reporter are AsyncMocks; the executor is real, wired to an
httpx.MockTransport so targets resolved from the asset are actually probed.

Covers:
1. NoCandidateAsset / CatalogUnavailable abort: no probes, no report
2. Happy path: media + thumbnail targets probed, report sent, summary
3. Configured bucket filter is applied
4. Verbose per-result log lines (and their absence when disabled)
5. Zero targets still sends an (empty) report

Run with:
    pytest tests/test_coordinator.py -v
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from core.contracts import ContentObjectKind, ProbeStatus, ReportStatus
from core.errors import CatalogUnavailable, NoCandidateAsset
from core.models import Asset
from function.config import ProbeConfig
from probe.coordinator import ProbeRun
from probe.executor import ProbeExecutor


# ============================================================================
# FIXTURES
# ============================================================================

def _asset():
    """A1: media M1 (B1 distributing, B2 not), thumbnail T1 (B1)."""
    def bucket(bucket_id, distributing, operators):
        return {"distributionBucket": {
            "id": bucket_id,
            "distributing": distributing,
            "operators": operators,
        }}

    return Asset.model_validate({
        "id": "A1",
        "media": {
            "id": "M1",
            "storageBag": {"distributionBuckets": [
                bucket("B1", True, [
                    {"workerId": 1, "metadata": {"nodeEndpoint": "https://ok.node/"}},
                    {"workerId": 2, "metadata": None},
                ]),
                bucket("B2", False, [
                    {"workerId": 3, "metadata": {"nodeEndpoint": "https://down.node/"}},
                ]),
            ]},
        },
        "thumbnailPhoto": {
            "id": "T1",
            "storageBag": {"distributionBuckets": [
                bucket("B1", True, [
                    {"workerId": 1, "metadata": {"nodeEndpoint": "https://ok.node/"}},
                ]),
            ]},
        },
    })


def _handler(request):
    if request.url.host == "ok.node":
        return httpx.Response(200)
    return httpx.Response(503)


def _config(**overrides):
    fields = dict(
        metrics_api_url="https://metrics.example.com/ingest",
        region="eastus",
        probe_timeout_seconds=1.0,
        bucket_filter="any",
    )
    fields.update(overrides)
    return ProbeConfig(**fields)


def _run(config, catalog, reporter, executor=None, logger=None):
    """Execute a ProbeRun with a MockTransport-backed executor."""

    async def _go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            run = ProbeRun(
                config,
                catalog=catalog,
                executor=executor or ProbeExecutor(
                    timeout_seconds=config.probe_timeout_seconds,
                    client=client,
                ),
                reporter=reporter,
                logger=logger,
            )
            return await run.run(run_name="edge_probe", run_id="inv-001")

    return asyncio.run(_go())


@pytest.fixture
def catalog():
    mock = MagicMock()
    mock.fetch_candidate_asset = AsyncMock(return_value=_asset())
    return mock


@pytest.fixture
def reporter():
    mock = MagicMock()
    mock.report = AsyncMock(return_value=ReportStatus.SENT)
    return mock


# ============================================================================
# ABORT PATHS
# ============================================================================

class TestCatalogFailureAborts:

    @pytest.mark.parametrize("error", [
        NoCandidateAsset("No test video found (limit=10, offset=500)"),
        CatalogUnavailable("Cannot reach catalog"),
    ])
    def test_abort_before_probing(self, error, reporter, caplog):
        catalog = MagicMock()
        catalog.fetch_candidate_asset = AsyncMock(side_effect=error)
        executor = MagicMock()
        executor.probe_all = AsyncMock()

        with caplog.at_level(logging.ERROR, logger="probe.coordinator"):
            with pytest.raises(type(error)):
                _run(_config(), catalog, reporter, executor=executor)

        executor.probe_all.assert_not_awaited()
        reporter.report.assert_not_awaited()
        errors = [r for r in caplog.records if r.name == "probe.coordinator"]
        assert len(errors) == 1
        assert str(error) in errors[0].getMessage()

    def test_catalog_window_from_config(self, catalog, reporter):
        _run(_config(catalog_limit=25, catalog_offset=100), catalog, reporter)

        catalog.fetch_candidate_asset.assert_awaited_once_with(limit=25, offset=100)


# ============================================================================
# HAPPY PATH
# ============================================================================

class TestProbeRun:

    def test_probes_media_and_thumbnail_and_reports(self, catalog, reporter):
        summary = _run(_config(), catalog, reporter)

        reporter.report.assert_awaited_once()
        results = reporter.report.await_args.args[0]
        assert [(r.target.data_object_id, r.target.worker_id) for r in results] == [
            ("M1", 1),
            ("M1", 3),
            ("T1", 1),
        ]
        assert [r.target.data_object_kind for r in results] == [
            ContentObjectKind.MEDIA,
            ContentObjectKind.MEDIA,
            ContentObjectKind.THUMBNAIL,
        ]
        assert all(r.target.region == "eastus" for r in results)

        assert summary.asset_id == "A1"
        assert summary.run_name == "edge_probe"
        assert summary.total == 3
        assert summary.counts[ProbeStatus.SUCCESS] == 2
        assert summary.counts[ProbeStatus.FAILURE] == 1
        assert summary.report_status == ReportStatus.SENT

    def test_distributing_filter_applied(self, catalog, reporter):
        summary = _run(_config(bucket_filter="distributing"), catalog, reporter)

        results = reporter.report.await_args.args[0]
        assert {r.target.distribution_bucket_id for r in results} == {"B1"}
        assert summary.counts[ProbeStatus.FAILURE] == 0

    def test_report_failure_does_not_fail_run(self, catalog, reporter):
        reporter.report = AsyncMock(return_value=ReportStatus.DELIVERY_FAILED)

        summary = _run(_config(), catalog, reporter)

        assert summary.report_status == ReportStatus.DELIVERY_FAILED
        assert summary.total == 3

    def test_verbose_logs_each_result(self, catalog, reporter, caplog):
        with caplog.at_level(logging.INFO, logger="probe.coordinator"):
            _run(_config(verbose=True), catalog, reporter)

        messages = [r.getMessage() for r in caplog.records if r.name == "probe.coordinator"]
        assert any(m.startswith("https://ok.node/api/v1/assets/M1 - success - ") for m in messages)
        assert "https://down.node/api/v1/assets/M1 - failure - 503" in messages

    def test_quiet_run_skips_result_lines(self, catalog, reporter, caplog):
        with caplog.at_level(logging.INFO, logger="probe.coordinator"):
            _run(_config(verbose=False), catalog, reporter)

        messages = [r.getMessage() for r in caplog.records if r.name == "probe.coordinator"]
        assert not any(" - success - " in m or " - failure - " in m for m in messages)
        assert any(m.startswith("Run completed: 3 probes") for m in messages)

    def test_zero_targets_still_reports(self, reporter):
        asset = Asset.model_validate({
            "id": "A2",
            "media": {"id": "M2", "storageBag": {"distributionBuckets": []}},
            "thumbnailPhoto": {"id": "T2", "storageBag": {"distributionBuckets": []}},
        })
        catalog = MagicMock()
        catalog.fetch_candidate_asset = AsyncMock(return_value=asset)

        summary = _run(_config(), catalog, reporter)

        reporter.report.assert_awaited_once_with([])
        assert summary.total == 0
