"""Data sources for ElastiCache descriptions."""

from .elasticache_client import ElastiCacheClient, ReplicationGroupLookupResult

__all__ = ['ElastiCacheClient', 'ReplicationGroupLookupResult']
