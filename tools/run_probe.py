#!/usr/bin/env python3
# ============================================================================
# CLI PROBE RUN TOOL
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Tool - One-shot local probe run
# PURPOSE: Run the probe without the Functions host
# CREATED: 14 OCT 2026
# ============================================================================
"""
Run a single probe from the command line.

Does exactly what the timer trigger does, with optional overrides:

Usage:
    # Defaults from environment
    python tools/run_probe.py

    # Dry run against a different window, no metrics report
    python tools/run_probe.py --offset 0 --limit 5 --no-report

    # Only distributing buckets, 2s deadline, JSON summary on stdout
    python tools/run_probe.py --bucket-filter distributing --timeout 2 --json
"""

import argparse
import asyncio
import dataclasses
import json
import os
import sys
import uuid

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.errors import ProbeRunError
from core.logging import configure_logging
from function.config import ProbeConfig
from probe.coordinator import ProbeRun


def build_config(args: argparse.Namespace) -> ProbeConfig:
    """Environment config with command-line overrides applied."""
    config = ProbeConfig.from_env()
    overrides = {}
    if args.limit is not None:
        overrides["catalog_limit"] = args.limit
    if args.offset is not None:
        overrides["catalog_offset"] = args.offset
    if args.timeout is not None:
        overrides["probe_timeout_seconds"] = args.timeout
    if args.bucket_filter is not None:
        overrides["bucket_filter"] = args.bucket_filter
    if args.no_report:
        overrides["metrics_api_url"] = None
    if args.quiet:
        overrides["verbose"] = False

    config = dataclasses.replace(config, **overrides)
    config.validate()
    return config


def main():
    parser = argparse.ArgumentParser(
        description="Run one edge probe (catalog -> probe -> report)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --offset 0 --limit 5 --no-report
  %(prog)s --bucket-filter distributing --timeout 2 --json
        """,
    )
    parser.add_argument("--limit", "-l", type=int, help="Catalog window size")
    parser.add_argument("--offset", "-o", type=int, help="Catalog window offset")
    parser.add_argument("--timeout", "-t", type=float, help="Per-probe deadline in seconds")
    parser.add_argument(
        "--bucket-filter", "-f",
        choices=["distributing", "distributing_or_sentinel", "any"],
        help="Bucket eligibility policy",
    )
    parser.add_argument("--no-report", action="store_true", help="Skip the metrics report")
    parser.add_argument("--quiet", "-q", action="store_true", help="No per-result lines")
    parser.add_argument("--json", action="store_true", help="Print run summary as JSON")

    args = parser.parse_args()

    try:
        config = build_config(args)
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(level=config.log_level, json_output=config.json_logs)

    run_id = f"cli-{uuid.uuid4().hex[:8]}"
    try:
        summary = asyncio.run(ProbeRun(config).run(run_name="run_probe", run_id=run_id))
    except ProbeRunError as e:
        print(f"ERROR: Run aborted: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"\n{summary.total} probes: {summary.counts_line()} (report: {summary.report_status.value})")


if __name__ == "__main__":
    main()
