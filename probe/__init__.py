# ============================================================================
# PROBE MODULE
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Orchestration engine
# PURPOSE: Endpoint resolution, concurrent probing and result reporting
# CREATED: 12 OCT 2026
# ============================================================================
"""
Probe Module

- resolver: catalog snapshot -> ProbeTarget list (pure)
- executor: concurrent deadline-bounded HEAD checks
- reporter: JSON POST of all results to the metrics sink
- coordinator: sequences one run (import probe.coordinator directly;
  it depends on function.config, which depends on this package)

Usage:
    from probe.coordinator import ProbeRun

    summary = await ProbeRun(ProbeConfig.from_env()).run(run_name="edge_probe")
"""

from probe.resolver import (
    EligibilityFilter,
    build_eligibility_filter,
    resolve_asset_targets,
    resolve_targets,
)
from probe.executor import ProbeExecutor, build_probe_url
from probe.reporter import MetricsReporter

__all__ = [
    # Resolver
    "EligibilityFilter",
    "build_eligibility_filter",
    "resolve_targets",
    "resolve_asset_targets",
    # Executor
    "ProbeExecutor",
    "build_probe_url",
    # Reporter
    "MetricsReporter",
]
