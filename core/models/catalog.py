# ============================================================================
# CATALOG SNAPSHOT MODELS
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Core model - Read-only catalog records
# PURPOSE: Typed view of the GraphQL asset / storage / bucket response
# LAST_REVIEWED: 12 OCT 2026
# EXPORTS: Asset, ContentObject, StorageBag, BucketBinding,
#          DistributionBucket, Operator, NodeMetadata
# DEPENDENCIES: pydantic
# ============================================================================
"""
Catalog Snapshot Models

Validated at the catalog client boundary. Field aliases match the
camelCase names returned by the GraphQL service, so a raw response
dict can be passed straight to model_validate().

Shape:
    Asset
      media / thumbnailPhoto -> ContentObject (optional)
        storageBag -> StorageBag
          distributionBuckets[] -> BucketBinding
            distributionBucket -> DistributionBucket
              operators[] -> Operator
                metadata -> NodeMetadata (optional)
                  nodeEndpoint (optional)

Absent optionals stay None; nothing is coerced to an empty string.
All records are frozen snapshots fetched fresh each run.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

_SNAPSHOT_CONFIG = {"frozen": True, "populate_by_name": True}


class NodeMetadata(BaseModel):
    """Metadata an operator publishes about its distribution node."""

    node_endpoint: Optional[str] = Field(default=None, alias="nodeEndpoint")

    model_config = _SNAPSHOT_CONFIG


class Operator(BaseModel):
    """A worker assigned to a distribution bucket."""

    worker_id: int = Field(..., alias="workerId")
    metadata: Optional[NodeMetadata] = None

    model_config = _SNAPSHOT_CONFIG

    @property
    def node_endpoint(self) -> Optional[str]:
        """Published endpoint, or None when metadata or endpoint is missing/empty."""
        if self.metadata is None or not self.metadata.node_endpoint:
            return None
        return self.metadata.node_endpoint


class DistributionBucket(BaseModel):
    """Logical group of operators that may serve a content object's bytes."""

    id: str
    distributing: bool = False
    operators: List[Operator] = Field(default_factory=list)

    model_config = _SNAPSHOT_CONFIG


class BucketBinding(BaseModel):
    """Association of a storage bag with one distribution bucket."""

    distribution_bucket: DistributionBucket = Field(..., alias="distributionBucket")

    model_config = _SNAPSHOT_CONFIG


class StorageBag(BaseModel):
    """Where a content object's bytes are replicated."""

    distribution_buckets: List[BucketBinding] = Field(
        default_factory=list,
        alias="distributionBuckets",
    )

    model_config = _SNAPSHOT_CONFIG


class ContentObject(BaseModel):
    """A storable unit of binary data (StorageDataObject)."""

    id: str
    storage_bag: StorageBag = Field(..., alias="storageBag")

    model_config = _SNAPSHOT_CONFIG


class Asset(BaseModel):
    """
    A catalogued video.

    Both content objects are independently probeable. Either may be
    absent in the response; the catalog client rejects such assets.
    """

    id: str
    media: Optional[ContentObject] = None
    thumbnail_photo: Optional[ContentObject] = Field(default=None, alias="thumbnailPhoto")

    model_config = _SNAPSHOT_CONFIG

    @property
    def is_probeable(self) -> bool:
        """Check that both media and thumbnail objects are present."""
        return self.media is not None and self.thumbnail_photo is not None


__all__ = [
    "Asset",
    "ContentObject",
    "StorageBag",
    "BucketBinding",
    "DistributionBucket",
    "Operator",
    "NodeMetadata",
]
