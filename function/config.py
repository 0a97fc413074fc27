# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Configuration management
# PURPOSE: Environment-based configuration for one probe run
# CREATED: 12 OCT 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables with sensible defaults.
The config is built once at the start of each invocation and threaded
through the catalog client, executor, reporter and coordinator; no
component reads the environment mid-run.

Environment:
- CATALOG_API_URL         GraphQL endpoint of the catalog service
- METRICS_API_URL         Metrics sink (optional; reporting skipped if unset)
- REGION_NAME             Region tag (Azure); AWS_REGION accepted as fallback
- PROBE_TIMEOUT_SECONDS   Per-probe deadline (default 5.0)
- CATALOG_LIMIT           Candidate window size (default 10)
- CATALOG_OFFSET          Candidate window offset (default 500)
- BUCKET_FILTER           distributing | distributing_or_sentinel | any
- SENTINEL_BUCKET_ID      Bucket always probed by distributing_or_sentinel
- PROBE_VERBOSE           Log one line per probe result (default true)
- LOG_LEVEL / LOG_FORMAT  Logging level and "json" for structured output
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from probe.resolver import (
    DEFAULT_SENTINEL_BUCKET_ID,
    EligibilityFilter,
    build_eligibility_filter,
)

DEFAULT_CATALOG_URL = "https://orion.joystream.org/graphql"


def _env(env: Mapping[str, str], name: str, default: Any) -> Any:
    """Value of `name`, or `default` when unset or blank."""
    value = env.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ProbeConfig:
    """Configuration for a probe run."""

    # Catalog (GraphQL read API)
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_limit: int = 10
    catalog_offset: int = 500
    catalog_timeout_seconds: float = 30.0

    # Probing
    probe_timeout_seconds: float = 5.0
    bucket_filter: str = "distributing_or_sentinel"
    sentinel_bucket_id: str = DEFAULT_SENTINEL_BUCKET_ID

    # Metrics sink
    metrics_api_url: Optional[str] = None
    report_timeout_seconds: float = 30.0

    # Tags / logging
    region: Optional[str] = None
    verbose: bool = True
    log_level: str = "INFO"
    json_logs: bool = False
    service_name: str = "edge-probe"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProbeConfig":
        """
        Load configuration from environment variables.

        Raises:
            ValueError: malformed numeric value or unknown BUCKET_FILTER
        """
        env = os.environ if environ is None else environ

        config = cls(
            catalog_url=_env(env, "CATALOG_API_URL", DEFAULT_CATALOG_URL),
            catalog_limit=int(_env(env, "CATALOG_LIMIT", 10)),
            catalog_offset=int(_env(env, "CATALOG_OFFSET", 500)),
            catalog_timeout_seconds=float(_env(env, "CATALOG_TIMEOUT_SECONDS", 30.0)),
            probe_timeout_seconds=float(_env(env, "PROBE_TIMEOUT_SECONDS", 5.0)),
            bucket_filter=_env(env, "BUCKET_FILTER", "distributing_or_sentinel"),
            sentinel_bucket_id=_env(env, "SENTINEL_BUCKET_ID", DEFAULT_SENTINEL_BUCKET_ID),
            metrics_api_url=_env(env, "METRICS_API_URL", None),
            report_timeout_seconds=float(_env(env, "REPORT_TIMEOUT_SECONDS", 30.0)),
            region=_env(env, "REGION_NAME", None) or _env(env, "AWS_REGION", None),
            verbose=_env_bool(env.get("PROBE_VERBOSE"), True),
            log_level=_env(env, "LOG_LEVEL", "INFO"),
            json_logs=_env(env, "LOG_FORMAT", "").lower() == "json",
            service_name=_env(env, "SERVICE_NAME", "edge-probe"),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Fail fast on values that would make every run meaningless."""
        if self.catalog_limit < 1:
            raise ValueError(f"CATALOG_LIMIT must be >= 1, got {self.catalog_limit}")
        if self.catalog_offset < 0:
            raise ValueError(f"CATALOG_OFFSET must be >= 0, got {self.catalog_offset}")
        if self.probe_timeout_seconds <= 0:
            raise ValueError(
                f"PROBE_TIMEOUT_SECONDS must be > 0, got {self.probe_timeout_seconds}"
            )
        # Raises on unknown filter names
        self.eligibility_filter()

    def eligibility_filter(self) -> EligibilityFilter:
        """Bucket eligibility policy for this run."""
        return build_eligibility_filter(self.bucket_filter, self.sentinel_bucket_id)

    @property
    def has_metrics_sink(self) -> bool:
        """Check if a metrics sink is configured."""
        return bool(self.metrics_api_url)


__all__ = ["ProbeConfig", "DEFAULT_CATALOG_URL"]
