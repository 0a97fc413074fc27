# ============================================================================
# CATALOG HTTP CLIENT
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Catalog - Async GraphQL client
# PURPOSE: Fetch a candidate asset for the run from the catalog service
# CREATED: 12 OCT 2026
# ============================================================================
"""
Catalog HTTP Client

Async httpx client for the catalog GraphQL API. One read query per run.

Selection policy: fetch a newest-first window of `limit` accepted videos
starting at `offset`, then pick one uniformly at random.

Errors:
- CatalogUnavailable: transport error, non-2xx status, unparseable body,
  GraphQL errors, or a response that does not match the snapshot models
- NoCandidateAsset: empty window, or chosen asset lacks media/thumbnail

Both are fatal for the run and are never retried here.
"""

import logging
import random
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from catalog.queries import GET_CANDIDATE_VIDEOS
from core.errors import CatalogUnavailable, NoCandidateAsset
from core.models.catalog import Asset

DEFAULT_TIMEOUT_SECONDS = 30.0


class CatalogClient:
    """Async client for the catalog GraphQL API."""

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._api_url = api_url
        self._timeout = httpx.Timeout(timeout_seconds)
        self._client = client
        self._rng = rng or random.Random()
        self._logger = logger or logging.getLogger(__name__)

    async def _query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a GraphQL document and return its `data` object.

        Raises:
            CatalogUnavailable: on any transport, HTTP or GraphQL error
        """
        body = {"query": query, "variables": variables}

        try:
            if self._client is not None:
                resp = await self._client.post(self._api_url, json=body)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.post(self._api_url, json=body)
        except httpx.TimeoutException as e:
            raise CatalogUnavailable(f"Catalog query timed out: {self._api_url}", cause=e) from e
        except httpx.HTTPError as e:
            raise CatalogUnavailable(
                f"Cannot reach catalog at {self._api_url}: {type(e).__name__}: {e}",
                cause=e,
            ) from e

        if resp.status_code >= 400:
            raise CatalogUnavailable(
                f"Catalog returned status {resp.status_code}: {resp.text[:500]}"
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise CatalogUnavailable("Catalog returned a non-JSON body", cause=e) from e

        if not isinstance(payload, dict):
            raise CatalogUnavailable("Catalog response is not a JSON object")

        errors = payload.get("errors")
        if errors:
            messages = [
                err.get("message", str(err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            raise CatalogUnavailable(f"Catalog query failed: {'; '.join(messages)}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise CatalogUnavailable("Catalog response has no data object")

        return data

    async def _fetch_window(self, limit: int, offset: int) -> List[Any]:
        """Raw `videos` entries of one window, newest first."""
        data = await self._query(GET_CANDIDATE_VIDEOS, {"limit": limit, "offset": offset})

        videos = data.get("videos")
        if not isinstance(videos, list):
            raise CatalogUnavailable("Catalog response has no videos list")
        return videos

    @staticmethod
    def _to_asset(video: Any) -> Asset:
        try:
            return Asset.model_validate(video)
        except ValidationError as e:
            raise CatalogUnavailable(f"Catalog response failed validation: {e}", cause=e) from e

    async def fetch_assets(self, limit: int, offset: int) -> List[Asset]:
        """
        Fetch one window of accepted videos, newest first.

        Raises:
            CatalogUnavailable: query failed or any entry is malformed
        """
        return [self._to_asset(video) for video in await self._fetch_window(limit, offset)]

    async def fetch_candidate_asset(self, limit: int, offset: int) -> Asset:
        """
        Pick the asset to probe this run.

        Only the picked entry is validated; malformed siblings in the
        window do not affect the run.

        Raises:
            CatalogUnavailable: query failed or the picked entry is malformed
            NoCandidateAsset: empty window or incomplete asset
        """
        videos = await self._fetch_window(limit, offset)
        self._logger.debug(f"Catalog window limit={limit} offset={offset}: {len(videos)} assets")

        if not videos:
            raise NoCandidateAsset(
                f"No test video found (limit={limit}, offset={offset})"
            )

        asset = self._to_asset(self._rng.choice(videos))
        if not asset.is_probeable:
            missing = [
                name
                for name, obj in (("media", asset.media), ("thumbnailPhoto", asset.thumbnail_photo))
                if obj is None
            ]
            raise NoCandidateAsset(
                f"Video {asset.id} is missing {', '.join(missing)}"
            )

        return asset


__all__ = ["CatalogClient", "DEFAULT_TIMEOUT_SECONDS"]
