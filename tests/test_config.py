# ============================================================================
# CONFIGURATION TESTS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Tests - Environment configuration
# PURPOSE: Verify env parsing, defaults and validation
# CREATED: 14 OCT 2026
# ============================================================================
"""
Configuration Tests

Run with:
    pytest tests/test_config.py -v
"""

import pytest

from function.config import DEFAULT_CATALOG_URL, ProbeConfig
from probe.resolver import any_bucket, distributing_only
from core.models import DistributionBucket


class TestProbeConfig:

    def test_defaults(self):
        config = ProbeConfig.from_env({})

        assert config.catalog_url == DEFAULT_CATALOG_URL
        assert config.catalog_limit == 10
        assert config.catalog_offset == 500
        assert config.probe_timeout_seconds == 5.0
        assert config.metrics_api_url is None
        assert config.has_metrics_sink is False
        assert config.region is None
        assert config.verbose is True
        assert config.bucket_filter == "distributing_or_sentinel"

    def test_from_env(self):
        config = ProbeConfig.from_env({
            "CATALOG_API_URL": "https://catalog.local/graphql",
            "METRICS_API_URL": "https://metrics.local/ingest",
            "REGION_NAME": "westeurope",
            "PROBE_TIMEOUT_SECONDS": "2.5",
            "CATALOG_LIMIT": "20",
            "CATALOG_OFFSET": "0",
            "BUCKET_FILTER": "distributing",
            "PROBE_VERBOSE": "false",
            "LOG_FORMAT": "json",
        })

        assert config.catalog_url == "https://catalog.local/graphql"
        assert config.has_metrics_sink is True
        assert config.region == "westeurope"
        assert config.probe_timeout_seconds == 2.5
        assert config.catalog_limit == 20
        assert config.catalog_offset == 0
        assert config.verbose is False
        assert config.json_logs is True
        assert config.eligibility_filter() is distributing_only

    def test_region_falls_back_to_aws_region(self):
        assert ProbeConfig.from_env({"AWS_REGION": "us-east-1"}).region == "us-east-1"

    def test_empty_sink_is_unconfigured(self):
        assert ProbeConfig.from_env({"METRICS_API_URL": ""}).has_metrics_sink is False

    def test_blank_settings_fall_back_to_defaults(self):
        config = ProbeConfig.from_env({
            "CATALOG_API_URL": "",
            "CATALOG_LIMIT": "",
            "CATALOG_OFFSET": " ",
            "CATALOG_TIMEOUT_SECONDS": "",
            "PROBE_TIMEOUT_SECONDS": "",
            "REPORT_TIMEOUT_SECONDS": "",
            "BUCKET_FILTER": "",
            "SENTINEL_BUCKET_ID": "",
            "REGION_NAME": "",
            "PROBE_VERBOSE": "",
            "LOG_LEVEL": "",
        })

        assert config == ProbeConfig()

    def test_default_filter_keeps_sentinel(self):
        config = ProbeConfig.from_env({"SENTINEL_BUCKET_ID": "1:4"})
        bucket_filter = config.eligibility_filter()

        assert bucket_filter(DistributionBucket(id="1:4", distributing=False))
        assert not bucket_filter(DistributionBucket(id="0:1", distributing=False))
        assert bucket_filter(DistributionBucket(id="2:2", distributing=True))

    def test_any_filter(self):
        assert ProbeConfig.from_env({"BUCKET_FILTER": "any"}).eligibility_filter() is any_bucket

    @pytest.mark.parametrize("env", [
        {"BUCKET_FILTER": "all"},
        {"PROBE_TIMEOUT_SECONDS": "0"},
        {"PROBE_TIMEOUT_SECONDS": "soon"},
        {"CATALOG_LIMIT": "0"},
        {"CATALOG_OFFSET": "-1"},
    ])
    def test_invalid_values_rejected(self, env):
        with pytest.raises(ValueError):
            ProbeConfig.from_env(env)
