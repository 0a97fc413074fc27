# ============================================================================
# RUN COORDINATOR
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Run sequencing
# PURPOSE: Catalog -> resolve -> probe -> report for one invocation
# CREATED: 13 OCT 2026
# ============================================================================
"""
Run Coordinator

Sequences one probe run:

1. Fetch a candidate asset from the catalog (random pick from a window)
2. Resolve probe targets for media and thumbnail
3. Probe every target concurrently
4. Report all results to the metrics sink
5. Log per-result lines (verbose) and the run summary

Catalog errors abort the run after logging: no probes, no report.
Everything after the catalog fetch is captured as data and never raised.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from catalog.client import CatalogClient
from core.errors import CatalogUnavailable, NoCandidateAsset
from core.logging import log_checkpoint, log_context
from core.models.summary import RunSummary
from function.config import ProbeConfig
from probe.executor import ProbeExecutor
from probe.reporter import MetricsReporter
from probe.resolver import resolve_asset_targets


class ProbeRun:
    """
    One probe run, wired from a ProbeConfig.

    Components can be injected for tests; by default they are built from
    the config.
    """

    def __init__(
        self,
        config: ProbeConfig,
        catalog: Optional[CatalogClient] = None,
        executor: Optional[ProbeExecutor] = None,
        reporter: Optional[MetricsReporter] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.catalog = catalog or CatalogClient(
            config.catalog_url,
            timeout_seconds=config.catalog_timeout_seconds,
        )
        self.executor = executor or ProbeExecutor(
            timeout_seconds=config.probe_timeout_seconds,
        )
        self.reporter = reporter or MetricsReporter(
            config.metrics_api_url,
            timeout_seconds=config.report_timeout_seconds,
        )
        # Fixed for the whole run
        self.eligibility_filter = config.eligibility_filter()
        self._logger = logger or logging.getLogger(__name__)

    async def run(
        self,
        run_name: str = "edge-probe",
        run_id: Optional[str] = None,
    ) -> RunSummary:
        """
        Execute the run.

        Raises:
            CatalogUnavailable: catalog query failed (logged first)
            NoCandidateAsset: nothing to probe (logged first)
        """
        started_at = datetime.now(timezone.utc)
        start_time = time.monotonic()
        region = self.config.region

        with log_context(run_id=run_id, run_name=run_name, region=region):
            self._logger.info(f'Starting run "{run_name}" at {started_at.isoformat()}')
            log_checkpoint("run_started", {"region": region})

            try:
                asset = await self.catalog.fetch_candidate_asset(
                    limit=self.config.catalog_limit,
                    offset=self.config.catalog_offset,
                )
            except CatalogUnavailable as e:
                self._logger.error(
                    f"Failed to fetch test video: {e}",
                    exc_info=e.cause is not None,
                )
                raise
            except NoCandidateAsset as e:
                self._logger.error(f"No test video found: {e}")
                raise

            with log_context(asset_id=asset.id):
                targets = resolve_asset_targets(
                    asset,
                    self.eligibility_filter,
                    region=region,
                )
                self._logger.info(
                    f"Probing {len(targets)} endpoints for video {asset.id} "
                    f"(filter={self.config.bucket_filter}, "
                    f"timeout={self.executor.timeout_seconds}s)"
                )

                results = await self.executor.probe_all(targets)
                log_checkpoint("probes_settled", {"count": len(results)})

                if self.config.verbose:
                    for result in results:
                        self._logger.info(result.summary_line())

                report_status = await self.reporter.report(results)

                summary = RunSummary.from_results(
                    run_name=run_name,
                    asset_id=asset.id,
                    results=results,
                    total_duration_ms=(time.monotonic() - start_time) * 1000,
                    report_status=report_status,
                    started_at=started_at,
                )
                self._logger.info(
                    f"Run completed: {summary.total} probes, "
                    f"{summary.counts_line()}, report={report_status.value}",
                    extra={"extra": summary.to_dict()},
                )
                log_checkpoint("run_completed", summary.to_dict())

        return summary


async def run_probe(
    config: ProbeConfig,
    run_name: str = "edge-probe",
    run_id: Optional[str] = None,
) -> RunSummary:
    """Convenience wrapper: build a ProbeRun from config and execute it."""
    return await ProbeRun(config).run(run_name=run_name, run_id=run_id)


__all__ = ["ProbeRun", "run_probe"]
