# ============================================================================
# CATALOG QUERIES
# ============================================================================
# EPOCH: 1 - EDGE PROBE
# STATUS: Catalog - GraphQL documents
# PURPOSE: Query text for candidate asset selection
# CREATED: 12 OCT 2026
# ============================================================================
"""
Catalog Queries

GET_CANDIDATE_VIDEOS returns a newest-first window of videos whose media
and thumbnail have both passed moderation (isAccepted). Bucket
eligibility is applied client-side by the resolver, so every bound
bucket is fetched together with its `distributing` flag.
"""

STORAGE_DATA_OBJECT_FRAGMENT = """
fragment StorageDataObjectFields on StorageDataObject {
  id
  storageBag {
    distributionBuckets {
      distributionBucket {
        id
        distributing
        operators {
          workerId
          metadata {
            nodeEndpoint
          }
        }
      }
    }
  }
}
"""

GET_CANDIDATE_VIDEOS = """
query GetVideos($limit: Int!, $offset: Int!) {
  videos(
    orderBy: [createdAt_DESC]
    limit: $limit
    offset: $offset
    where: {
      media: { isAccepted_eq: true }
      thumbnailPhoto: { isAccepted_eq: true }
    }
  ) {
    id
    media {
      ...StorageDataObjectFields
    }
    thumbnailPhoto {
      ...StorageDataObjectFields
    }
  }
}
""" + STORAGE_DATA_OBJECT_FRAGMENT


__all__ = ["GET_CANDIDATE_VIDEOS", "STORAGE_DATA_OBJECT_FRAGMENT"]
