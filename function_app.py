# ============================================================================
# EDGE PROBE - Azure Function App
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Entry point - Scheduled synthetic probe
# PURPOSE: Timer-triggered probe of distribution nodes serving one asset
# CREATED: 13 OCT 2026
# ============================================================================
"""
Edge Probe Function App

Azure Functions V2 entry point providing:
- edge_probe: timer trigger, one probe run per tick
- /api/livez: liveness probe (always available)

Each invocation is independent and stateless: configuration is read
from the environment once at the start of the run and threaded through
the components.

Schedule:
- PROBE_SCHEDULE (NCRONTAB, default every 5 minutes)
"""

import azure.functions as func
import json
import logging
import os

from __version__ import __version__
from core.logging import configure_logging
from function.config import ProbeConfig
from probe.coordinator import ProbeRun

# ============================================================================
# CREATE APP
# ============================================================================

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger(__name__)

PROBE_SCHEDULE = os.environ.get("PROBE_SCHEDULE", "0 */5 * * * *")

logger.info(f"Edge Probe Function App v{__version__} starting (schedule={PROBE_SCHEDULE})")


# ============================================================================
# LIVENESS
# ============================================================================

@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness probe - always returns 200 if function is running.

    GET /api/livez
    """
    return func.HttpResponse(
        json.dumps({"alive": True, "service": "edge-probe", "version": __version__}),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# SCHEDULED PROBE
# ============================================================================

@app.timer_trigger(
    schedule=PROBE_SCHEDULE,
    arg_name="timer",
    run_on_startup=False,
    use_monitor=False,
)
async def edge_probe(timer: func.TimerRequest, context: func.Context) -> None:
    """
    Run one probe.

    Catalog failures are logged once by the run and propagate so the host
    records a failed invocation. Probe and report failures are data and never raise.
    """
    config = ProbeConfig.from_env()
    configure_logging(
        level=config.log_level,
        json_output=config.json_logs,
        replace_handlers=False,
    )

    if timer.past_due:
        logger.warning("Probe timer is past due")

    await ProbeRun(config).run(
        run_name=context.function_name,
        run_id=context.invocation_id,
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["app"]
