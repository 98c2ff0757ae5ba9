"""Core functionality for ElastiCache endpoint resolution.

This module contains the foundational utilities used across all other modules:
- Configuration management (the AWSConfig builder)
- Credential provider chains and boto3 session construction
- Logging utilities
- Error types
"""

from .config import AWSConfig
from .error_handling import (
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

__all__ = [
    "AWSConfig",
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
