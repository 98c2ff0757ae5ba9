"""Processing modules turning ElastiCache descriptions into endpoint descriptors."""

from .endpoint_resolver import RedisEndpointResolver
from .endpoints import RedisEndpoint, RedisEndpoints

__all__ = [
    'RedisEndpoint',
    'RedisEndpoints',
    'RedisEndpointResolver',
]
