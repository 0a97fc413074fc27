# ============================================================================
# PROBE EXECUTOR
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Concurrent liveness checks
# PURPOSE: Run one deadline-bounded HEAD request per target and classify it
# CREATED: 12 OCT 2026
# ============================================================================
"""
Probe Executor

Executes probes with:
- Full concurrency (one asyncio task per target, no fan-out limit)
- Per-probe deadline (asyncio.wait_for cancels the in-flight request)
- Full join: probe_all() returns only after every probe has settled

Classification:
    deadline exceeded         -> ProbeTimeout
    non-2xx response          -> ProbeFailure(status_code)
    2xx response              -> ProbeSuccess(latency_ms)
    3xx                       -> followed; the final response is classified
    other transport error     -> ProbeFailure(None) + ERROR diagnostic

Probes never raise; every outcome is data. A slow or broken endpoint
cannot delay or abort any other probe.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional, Sequence

import httpx

from core.models.probe import (
    ProbeFailure,
    ProbeOutcome,
    ProbeResult,
    ProbeSuccess,
    ProbeTarget,
    ProbeTimeout,
)

DEFAULT_PROBE_TIMEOUT_SECONDS = 5.0
PROBE_PATH_TEMPLATE = "api/v1/assets/{data_object_id}"


def build_probe_url(target: ProbeTarget) -> str:
    """
    Join the node endpoint with the asset path.

    Endpoints are published with a trailing slash, so this is a plain
    concatenation: "https://node/distributor/" -> ".../api/v1/assets/<id>".
    """
    return target.node_endpoint + PROBE_PATH_TEMPLATE.format(
        data_object_id=target.data_object_id
    )


class ProbeExecutor:
    """
    Executes liveness probes against distribution nodes.

    All probes in a call share one httpx.AsyncClient (connection pool
    only); each probe owns its own deadline.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_PROBE_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize executor.

        Args:
            timeout_seconds: Per-probe deadline, measured from dispatch
            client: Shared HTTP client (created per call if None)
            logger: Diagnostic logger (module logger if None)
        """
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    @asynccontextmanager
    async def _client_scope(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client, or a fresh one closed on exit."""
        if self._client is not None:
            yield self._client
            return

        # Deadlines are enforced per probe, not by httpx.
        limits = httpx.Limits(max_connections=None, max_keepalive_connections=None)
        async with httpx.AsyncClient(timeout=None, limits=limits) as client:
            yield client

    async def probe_all(self, targets: Sequence[ProbeTarget]) -> List[ProbeResult]:
        """
        Probe every target concurrently.

        Returns:
            Exactly one result per target, in target order
        """
        if not targets:
            return []

        async with self._client_scope() as client:
            tasks = [
                asyncio.create_task(self.probe_one(client, target))
                for target in targets
            ]
            results = await asyncio.gather(*tasks)

        return list(results)

    async def probe_one(
        self,
        client: httpx.AsyncClient,
        target: ProbeTarget,
    ) -> ProbeResult:
        """Probe a single target; never raises."""
        url = build_probe_url(target)
        dispatched_at = datetime.now(timezone.utc)
        start_time = time.monotonic()

        outcome: ProbeOutcome
        try:
            response = await asyncio.wait_for(
                client.head(url, follow_redirects=True),
                timeout=self.timeout_seconds,
            )
            latency_ms = (time.monotonic() - start_time) * 1000

            if response.is_success:
                outcome = ProbeSuccess(latency_ms=latency_ms)
            else:
                outcome = ProbeFailure(status_code=response.status_code)

        except (asyncio.TimeoutError, httpx.TimeoutException):
            # wait_for has already cancelled the request task
            outcome = ProbeTimeout()

        except httpx.HTTPError as e:
            self._logger.error(
                f"Probe transport error for worker {target.worker_id} "
                f"bucket {target.distribution_bucket_id} at {url}: "
                f"{type(e).__name__}: {e}"
            )
            outcome = ProbeFailure(status_code=None)

        except Exception as e:
            self._logger.exception(
                f"Unexpected probe error for worker {target.worker_id} "
                f"bucket {target.distribution_bucket_id} at {url}: {e}"
            )
            outcome = ProbeFailure(status_code=None)

        self._logger.debug(f"Probe {url}: {outcome.status}")

        return ProbeResult(
            target=target,
            time=dispatched_at,
            url=url,
            outcome=outcome,
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ProbeExecutor",
    "build_probe_url",
    "DEFAULT_PROBE_TIMEOUT_SECONDS",
    "PROBE_PATH_TEMPLATE",
]
