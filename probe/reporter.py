# ============================================================================
# RESULT REPORTER
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Metrics delivery
# PURPOSE: POST the full result set of a run to the metrics sink
# CREATED: 12 OCT 2026
# ============================================================================
"""
Result Reporter

Serializes every ProbeResult of a run into one JSON array and POSTs it
to the configured metrics sink.

Delivery is best-effort and at-most-once:
- No sink configured   -> diagnostic logged, nothing sent
- Non-2xx from sink    -> status and body logged
- Transport error      -> logged
Nothing is raised to the caller and nothing is retried. The returned
ReportStatus is recorded on the run summary.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from core.contracts import ReportStatus
from core.models.probe import ProbeResult


def build_payload(results: Sequence[ProbeResult]) -> List[Dict[str, Any]]:
    """Metrics-sink records for a run, one per result."""
    return [result.to_record() for result in results]


class MetricsReporter:
    """
    Reports probe results via HTTP POST to the metrics sink.

    POST <METRICS_API_URL>
    Content-Type: application/json
    """

    def __init__(
        self,
        sink_url: Optional[str],
        timeout_seconds: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize metrics reporter.

        Args:
            sink_url: Metrics endpoint; None disables reporting
            timeout_seconds: Request timeout
            session: Shared aiohttp session (created per report if None)
            logger: Diagnostic logger (module logger if None)
        """
        self._sink_url = sink_url or None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._logger = logger or logging.getLogger(__name__)

    @property
    def is_configured(self) -> bool:
        return self._sink_url is not None

    async def report(self, results: Sequence[ProbeResult]) -> ReportStatus:
        """Send all results in a single POST; never raises."""
        if not self.is_configured:
            self._logger.warning("METRICS_API_URL not set, skipping metrics report")
            return ReportStatus.SINK_UNCONFIGURED

        payload = build_payload(results)
        self._logger.info(
            f"Sending {len(payload)} results to metrics API at {self._sink_url}"
        )

        owns_session = self._session is None
        session = self._session or aiohttp.ClientSession(timeout=self._timeout)
        try:
            async with session.post(
                self._sink_url,
                json=payload,
                headers={"Content-Type": "application/json"},
            ) as response:
                if 200 <= response.status < 300:
                    self._logger.info(f"Sent metrics report (status={response.status})")
                    return ReportStatus.SENT

                body = await response.text()
                self._logger.error(
                    f"Failed to send results to metrics API with status {response.status}, "
                    f"body={body[:500]}"
                )
                return ReportStatus.DELIVERY_FAILED

        except asyncio.TimeoutError:
            self._logger.error(f"Metrics report timed out after {self._timeout.total}s")
            return ReportStatus.DELIVERY_FAILED

        except aiohttp.ClientError as e:
            self._logger.error(f"Metrics report error: {type(e).__name__}: {e}")
            return ReportStatus.DELIVERY_FAILED

        finally:
            if owns_session:
                await session.close()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "MetricsReporter",
    "build_payload",
]
