# ============================================================================
# RUN ERRORS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Foundation - Exceptions that abort a probe run
# PURPOSE: Typed fatal errors raised by the catalog client
# CREATED: 12 OCT 2026
# ============================================================================
"""
Run Errors

Only catalog failures abort a run. Everything downstream (probe
timeouts, non-2xx responses, report delivery) is captured as data.
"""

from typing import Optional


class ProbeRunError(Exception):
    """Base for errors that abort a probe run before any probing."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CatalogUnavailable(ProbeRunError):
    """Catalog query failed (transport, HTTP status, GraphQL errors, bad shape)."""
    pass


class NoCandidateAsset(ProbeRunError):
    """
    Catalog answered but there is nothing to probe.

    Raised for an empty window or an asset without both content objects.
    Indicates an upstream data problem; never retried in-process.
    """
    pass


__all__ = [
    "ProbeRunError",
    "CatalogUnavailable",
    "NoCandidateAsset",
]
