"""Resolve ElastiCache cluster identifiers into Redis endpoint descriptors."""

from typing import Any, Dict, List

from ..core.error_handling import (
    AmbiguousClusterError,
    ClusterNotFoundError,
    EndpointError,
    InvalidInputError,
    NoEndpointError,
    NotClusterConfigError,
)
from ..core.logging import get_logger
from ..data_sources.elasticache_client import ElastiCacheClient
from .endpoints import RedisEndpoint, RedisEndpoints


class RedisEndpointResolver:
    """Translates a cluster identifier into a :class:`RedisEndpoints` descriptor.

    Replication groups are tried first; identifiers that are not replication
    groups fall back to a cache cluster lookup. The resolver holds no state
    besides its data source, so one instance can serve many lookups.
    """

    def __init__(self, source: ElastiCacheClient, include_primary_in_readers: bool = True):
        """Initialize resolver.

        Args:
            source: ElastiCache data source used for the describe calls
            include_primary_in_readers: Keep the primary's own member in
                read_endpoints for non-cluster-mode groups
        """
        self.source = source
        self.include_primary_in_readers = include_primary_in_readers
        self.logger = get_logger("resolver")

    @classmethod
    def from_config(cls, config) -> "RedisEndpointResolver":
        """Create a resolver whose client is built lazily from ``config``."""
        return cls(
            ElastiCacheClient(config=config),
            include_primary_in_readers=config.include_primary_in_readers,
        )

    def resolve_primary_endpoint(self, cluster_id: str) -> RedisEndpoints:
        """Resolve the endpoints of a replication group or cache cluster.

        Args:
            cluster_id: Replication group id or cache cluster id

        Returns:
            Populated RedisEndpoints

        Raises:
            InvalidInputError: If cluster_id is empty
            AmbiguousClusterError: If more than one group or cluster matches
            ClusterNotFoundError: If nothing matches
            NoEndpointError: If the matched group or cache cluster has no primary endpoint
            NotClusterConfigError: If a cluster-mode group has no configuration endpoint
            UpstreamError: If a describe call fails
        """
        if not cluster_id:
            raise InvalidInputError("No cluster name provided")

        with self.logger.timer(
            "endpoint resolution", expected=(EndpointError,), cluster_id=cluster_id
        ):
            lookup = self.source.describe_replication_group(cluster_id)

            if lookup.count > 1:
                raise AmbiguousClusterError(
                    f"More than one replication group matches '{cluster_id}'"
                )
            if lookup.count == 1:
                return self._from_replication_group(cluster_id, lookup.group)

            return self._from_cache_cluster(cluster_id)

    def resolve_all_endpoints(self, cluster_id: str) -> RedisEndpoints:
        """Resolve primary, configuration and read endpoints (same lookup as the primary)."""
        return self.resolve_primary_endpoint(cluster_id)

    def resolve_cluster_config_endpoint(self, cluster_id: str) -> RedisEndpoint:
        """Return the configuration endpoint of a cluster-mode replication group.

        Raises:
            InvalidInputError: If cluster_id is empty
            ClusterNotFoundError: If no replication group matches
            AmbiguousClusterError: If more than one replication group matches
            NotClusterConfigError: If the group has no configuration endpoint
        """
        if not cluster_id:
            raise InvalidInputError("No cluster name provided")

        lookup = self.source.describe_replication_group(cluster_id)
        if lookup.count == 0:
            raise ClusterNotFoundError(f"No replication group matches '{cluster_id}'")
        if lookup.count > 1:
            raise AmbiguousClusterError(
                f"More than one replication group matches '{cluster_id}'"
            )

        configuration_endpoint = lookup.group.get("ConfigurationEndpoint")
        if not configuration_endpoint:
            raise NotClusterConfigError(
                f"No cluster endpoint found for '{cluster_id}', "
                "perhaps this is not a cluster configuration"
            )
        return RedisEndpoint.from_api(configuration_endpoint)

    def _from_replication_group(self, cluster_id: str, group: Dict[str, Any]) -> RedisEndpoints:
        if group.get("ClusterEnabled"):
            cluster_config = self.resolve_cluster_config_endpoint(cluster_id)
            self.logger.info(
                "Resolved cluster-mode replication group",
                cluster_id=cluster_id,
                endpoint=str(cluster_config),
            )
            return RedisEndpoints(
                cluster_config=cluster_config,
                replication_group=True,
                cluster_enabled=True,
            )

        # Groups that are still creating or modifying may omit either field
        node_groups = group.get("NodeGroups") or []
        primary_endpoint = node_groups[0].get("PrimaryEndpoint") if node_groups else None
        if not primary_endpoint:
            raise NoEndpointError(
                f"No primary endpoint associated with replication group '{cluster_id}'"
            )

        primary = RedisEndpoint.from_api(primary_endpoint)
        members = node_groups[0].get("NodeGroupMembers") or []

        read_endpoints = ()
        read_replicas = len(members) > 1
        if read_replicas:
            read_endpoints = tuple(self._read_endpoints(members))

        self.logger.info(
            "Resolved replication group",
            cluster_id=cluster_id,
            primary=str(primary),
            readers=len(read_endpoints),
        )
        return RedisEndpoints(
            primary=primary,
            read_endpoints=read_endpoints,
            replication_group=True,
            read_replicas=read_replicas,
        )

    def _read_endpoints(self, members: List[Dict[str, Any]]) -> List[RedisEndpoint]:
        endpoints = []
        for member in members:
            if not self.include_primary_in_readers and member.get("CurrentRole") == "primary":
                continue
            read_endpoint = member.get("ReadEndpoint")
            if not read_endpoint:
                self.logger.debug(
                    "Skipping member without read endpoint",
                    cache_cluster_id=member.get("CacheClusterId"),
                )
                continue
            endpoints.append(RedisEndpoint.from_api(read_endpoint))
        return endpoints

    def _from_cache_cluster(self, cluster_id: str) -> RedisEndpoints:
        clusters = self.source.describe_cache_clusters(cluster_id)

        if not clusters:
            raise ClusterNotFoundError(
                f"No replication groups or cache clusters associated with '{cluster_id}'"
            )
        if len(clusters) > 1:
            raise AmbiguousClusterError(
                f"More than one cache cluster associated with '{cluster_id}'"
            )

        nodes = clusters[0].get("CacheNodes") or []
        endpoint = nodes[0].get("Endpoint") if nodes else None
        if not endpoint:
            raise NoEndpointError(f"No cache cluster endpoint associated with '{cluster_id}'")

        primary = RedisEndpoint.from_api(endpoint)
        self.logger.info("Resolved cache cluster", cluster_id=cluster_id, primary=str(primary))
        return RedisEndpoints(primary=primary)
