"""ElastiCache Endpoints

Builds boto3 sessions from an explicit credential-provider chain and resolves
ElastiCache Redis replication groups and cache clusters into connection
endpoints (primary, cluster configuration and read replicas).
"""

__version__ = "1.0.0"

from .core.config import AWSConfig
from .core.error_handling import (
    AmbiguousClusterError,
    ClusterNotFoundError,
    EndpointError,
    IncompatibleStateError,
    InvalidInputError,
    NoEndpointError,
    NotClusterConfigError,
    SessionError,
    UpstreamError,
)
from .data_sources.elasticache_client import ElastiCacheClient
from .processors.endpoint_resolver import RedisEndpointResolver
from .processors.endpoints import RedisEndpoint, RedisEndpoints

__all__ = [
    "AWSConfig",
    "ElastiCacheClient",
    "RedisEndpointResolver",
    "RedisEndpoint",
    "RedisEndpoints",
    "EndpointError",
    "InvalidInputError",
    "ClusterNotFoundError",
    "AmbiguousClusterError",
    "IncompatibleStateError",
    "NotClusterConfigError",
    "NoEndpointError",
    "SessionError",
    "UpstreamError",
]
