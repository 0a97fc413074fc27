# ============================================================================
# CATALOG MODULE
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Catalog - Read-only access to the catalog service
# PURPOSE: GraphQL query documents and async client
# CREATED: 12 OCT 2026
# ============================================================================

from catalog.client import CatalogClient
from catalog.queries import GET_CANDIDATE_VIDEOS

__all__ = ["CatalogClient", "GET_CANDIDATE_VIDEOS"]
