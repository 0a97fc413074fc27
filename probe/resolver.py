# ============================================================================
# ENDPOINT RESOLVER
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Probe - Target derivation from catalog metadata
# PURPOSE: Turn a content object's bucket/operator tree into probe targets
# CREATED: 12 OCT 2026
# ============================================================================
"""
Endpoint Resolver

Walks ContentObject -> StorageBag -> BucketBinding -> DistributionBucket
-> Operator and emits one ProbeTarget per operator that publishes a
node endpoint, for every bucket accepted by the eligibility filter.

Pure functions, no I/O.

Eligibility filters (fixed for a run, chosen by BUCKET_FILTER):
- distributing               bucket.distributing is True
- distributing_or_sentinel   distributing, or bucket id == sentinel (default)
- any                        no bucket filter, operator presence only

Content-object policy: both media and thumbnail are resolved every run
and the union is probed, media targets first.
"""

from typing import Callable, Dict, List, Optional

from core.contracts import ContentObjectKind
from core.models.catalog import Asset, ContentObject, DistributionBucket
from core.models.probe import ProbeTarget

EligibilityFilter = Callable[[DistributionBucket], bool]

# Bucket probed even when not flagged distributing
DEFAULT_SENTINEL_BUCKET_ID = "0:1"


# ============================================================================
# ELIGIBILITY FILTERS
# ============================================================================

def distributing_only(bucket: DistributionBucket) -> bool:
    """Accept only buckets actively serving traffic."""
    return bucket.distributing is True


def distributing_or_sentinel(
    sentinel_id: str = DEFAULT_SENTINEL_BUCKET_ID,
) -> EligibilityFilter:
    """Accept distributing buckets plus one fixed sentinel bucket."""

    def _filter(bucket: DistributionBucket) -> bool:
        return bucket.distributing is True or bucket.id == sentinel_id

    return _filter


def any_bucket(bucket: DistributionBucket) -> bool:
    """Accept every bucket; rely on operator endpoints alone."""
    return True


def build_eligibility_filter(
    name: str,
    sentinel_id: str = DEFAULT_SENTINEL_BUCKET_ID,
) -> EligibilityFilter:
    """
    Map a configured filter name to a filter.

    Raises:
        ValueError: unknown filter name
    """
    factories: Dict[str, Callable[[], EligibilityFilter]] = {
        "distributing": lambda: distributing_only,
        "distributing_or_sentinel": lambda: distributing_or_sentinel(sentinel_id),
        "any": lambda: any_bucket,
    }
    key = (name or "").strip().lower()
    if key not in factories:
        raise ValueError(
            f"Unknown bucket filter '{name}' (expected one of: {', '.join(factories)})"
        )
    return factories[key]()


# ============================================================================
# RESOLUTION
# ============================================================================

def resolve_targets(
    content_object: ContentObject,
    eligibility_filter: EligibilityFilter,
    kind: Optional[ContentObjectKind] = None,
    region: Optional[str] = None,
) -> List[ProbeTarget]:
    """
    Derive probe targets for one content object.

    Args:
        content_object: Media or thumbnail object from the catalog
        eligibility_filter: Bucket acceptance policy for this run
        kind: Content object kind tag recorded on each target
        region: Invocation region tag recorded on each target

    Returns:
        Targets in bucket order, then operator order
    """
    targets: List[ProbeTarget] = []

    for binding in content_object.storage_bag.distribution_buckets:
        bucket = binding.distribution_bucket
        if not eligibility_filter(bucket):
            continue

        for operator in bucket.operators:
            endpoint = operator.node_endpoint
            if not endpoint:
                continue
            targets.append(
                ProbeTarget(
                    data_object_id=content_object.id,
                    data_object_kind=kind,
                    distribution_bucket_id=bucket.id,
                    worker_id=operator.worker_id,
                    node_endpoint=endpoint,
                    region=region,
                )
            )

    return targets


def resolve_asset_targets(
    asset: Asset,
    eligibility_filter: EligibilityFilter,
    region: Optional[str] = None,
) -> List[ProbeTarget]:
    """
    Derive targets for every content object of an asset.

    Missing content objects contribute nothing; the catalog client has
    already rejected assets lacking either one.
    """
    targets: List[ProbeTarget] = []
    for kind, content_object in (
        (ContentObjectKind.MEDIA, asset.media),
        (ContentObjectKind.THUMBNAIL, asset.thumbnail_photo),
    ):
        if content_object is None:
            continue
        targets.extend(
            resolve_targets(content_object, eligibility_filter, kind=kind, region=region)
        )
    return targets


__all__ = [
    "EligibilityFilter",
    "DEFAULT_SENTINEL_BUCKET_ID",
    "distributing_only",
    "distributing_or_sentinel",
    "any_bucket",
    "build_eligibility_filter",
    "resolve_targets",
    "resolve_asset_targets",
]
