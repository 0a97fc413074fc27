# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Entry point - Azure Function App components
# PURPOSE: Per-invocation configuration for the scheduled probe
# CREATED: 12 OCT 2026
# ============================================================================
"""
Function App Module

Contains components specific to the Azure Function App deployment:
- Configuration (environment -> ProbeConfig, once per invocation)
"""

__all__ = []
