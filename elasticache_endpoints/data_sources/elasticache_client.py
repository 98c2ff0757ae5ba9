"""ElastiCache client for replication group and cache cluster descriptions."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..core.error_handling import (
    ErrorHandler,
    InvalidInputError,
    SessionError,
    aws_error_code,
)
from ..core.logging import get_logger
from .base import AWSDataSource

REPLICATION_GROUP_NOT_FOUND = "ReplicationGroupNotFoundFault"
CACHE_CLUSTER_NOT_FOUND = "CacheClusterNotFound"


@dataclass(frozen=True)
class ReplicationGroupLookupResult:
    """Raw DescribeReplicationGroups response plus the number of matched groups.

    A count of 0 means the identifier is not a replication group, 1 is a normal
    match and anything higher is ambiguous.
    """

    response: Optional[Dict[str, Any]]
    count: int

    @property
    def replication_groups(self) -> List[Dict[str, Any]]:
        if not self.response:
            return []
        return self.response.get("ReplicationGroups", [])

    @property
    def group(self) -> Dict[str, Any]:
        """The single matched group; only meaningful when count == 1."""
        return self.replication_groups[0]


class ElastiCacheClient(AWSDataSource):
    """Read-only access to the two ElastiCache describe calls used for endpoint lookups."""

    def __init__(self, config=None, client=None):
        super().__init__(config=config, client=client)
        self.logger = get_logger("elasticache_client")
        self._error_handler = ErrorHandler()

    def get_client(self):
        """Get the ElastiCache client, building it from the config on first use.

        Raises:
            SessionError: If no client can be built
        """
        if self._client is None:
            if self.config is None:
                raise SessionError("No ElastiCache client or AWSConfig provided")
            self._client = self.config.client("elasticache")
            if self._client is None:
                raise SessionError(
                    f"Unable to create ElastiCache client for region {self.config.region}"
                )
        return self._client

    def describe_replication_group(self, cluster_id: str) -> ReplicationGroupLookupResult:
        """Describe the replication group named ``cluster_id``.

        Returns:
            Lookup result; count 0 when no replication group has that id

        Raises:
            InvalidInputError: If cluster_id is empty
            UpstreamError: If the API call fails for any other reason
        """
        if not cluster_id:
            raise InvalidInputError("No cluster name provided")

        client = self.get_client()
        try:
            self.logger.debug("DescribeReplicationGroups", cluster_id=cluster_id)
            response = client.describe_replication_groups(ReplicationGroupId=cluster_id)
        except ClientError as e:
            if aws_error_code(e) == REPLICATION_GROUP_NOT_FOUND:
                self.logger.debug("No replication group found", cluster_id=cluster_id)
                return ReplicationGroupLookupResult(response=None, count=0)
            raise self._error_handler.wrap_upstream(
                e, "DescribeReplicationGroups", cluster_id
            ) from e
        except BotoCoreError as e:
            raise self._error_handler.wrap_upstream(
                e, "DescribeReplicationGroups", cluster_id
            ) from e

        count = len(response.get("ReplicationGroups", []))
        if count == 0:
            return ReplicationGroupLookupResult(response=None, count=0)
        return ReplicationGroupLookupResult(response=response, count=count)

    def describe_cache_clusters(self, cluster_id: str) -> List[Dict[str, Any]]:
        """Describe the cache cluster named ``cluster_id`` with node detail.

        Returns:
            List of cache cluster descriptions; empty when none match

        Raises:
            InvalidInputError: If cluster_id is empty
            UpstreamError: If the API call fails for any other reason
        """
        if not cluster_id:
            raise InvalidInputError("Did not provide a cluster name for the describe call")

        client = self.get_client()
        try:
            self.logger.debug("DescribeCacheClusters", cluster_id=cluster_id)
            response = client.describe_cache_clusters(
                CacheClusterId=cluster_id, ShowCacheNodeInfo=True
            )
        except ClientError as e:
            if aws_error_code(e) == CACHE_CLUSTER_NOT_FOUND:
                self.logger.debug("No cache cluster found", cluster_id=cluster_id)
                return []
            raise self._error_handler.wrap_upstream(
                e, "DescribeCacheClusters", cluster_id
            ) from e
        except BotoCoreError as e:
            raise self._error_handler.wrap_upstream(
                e, "DescribeCacheClusters", cluster_id
            ) from e

        return response.get("CacheClusters", [])
