"""Endpoint descriptor types returned by the resolver."""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class RedisEndpoint:
    """A single host/port pair; the port keeps the API's integer rendered in base 10."""

    host: str
    port: str

    @classmethod
    def from_api(cls, endpoint: Dict[str, Any]) -> "RedisEndpoint":
        """Build from an ElastiCache ``{"Address": ..., "Port": ...}`` structure."""
        return cls(host=endpoint["Address"], port=str(int(endpoint["Port"])))

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    def to_dict(self) -> Dict[str, str]:
        return {"Host": self.host, "Port": self.port}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RedisEndpoint":
        return cls(host=data["Host"], port=str(data["Port"]))


@dataclass(frozen=True)
class RedisEndpoints:
    """Resolved topology of one named cluster.

    ``primary`` is the connect-here address unless ``cluster_enabled`` is set,
    in which case ``cluster_config`` is.
    """

    primary: Optional[RedisEndpoint] = None
    cluster_config: Optional[RedisEndpoint] = None
    read_endpoints: Tuple[RedisEndpoint, ...] = ()
    replication_group: bool = False
    read_replicas: bool = False
    cluster_enabled: bool = False

    def primary_string(self) -> str:
        """``host:port`` of the primary endpoint, for redis-py and friends."""
        if self.primary is None:
            return ""
        return str(self.primary)

    def cluster_config_string(self) -> str:
        """``host:port`` of the configuration endpoint, or "" when cluster mode is off."""
        if self.cluster_enabled and self.cluster_config is not None:
            return str(self.cluster_config)
        return ""

    def readers(self) -> List[str]:
        """``host:port`` of every read endpoint, in encounter order."""
        return [str(endpoint) for endpoint in self.read_endpoints]

    def connect_string(self) -> str:
        return self.cluster_config_string() if self.cluster_enabled else self.primary_string()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Primary": self.primary.to_dict() if self.primary else None,
            "ClusterConfig": self.cluster_config.to_dict() if self.cluster_config else None,
            "ReadEndpoints": [endpoint.to_dict() for endpoint in self.read_endpoints],
            "ReplicationGroup": self.replication_group,
            "ReadReplicas": self.read_replicas,
            "ClusterEnabled": self.cluster_enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RedisEndpoints":
        primary = data.get("Primary")
        cluster_config = data.get("ClusterConfig")
        return cls(
            primary=RedisEndpoint.from_dict(primary) if primary else None,
            cluster_config=RedisEndpoint.from_dict(cluster_config) if cluster_config else None,
            read_endpoints=tuple(
                RedisEndpoint.from_dict(endpoint) for endpoint in data.get("ReadEndpoints") or []
            ),
            replication_group=bool(data.get("ReplicationGroup", False)),
            read_replicas=bool(data.get("ReadReplicas", False)),
            cluster_enabled=bool(data.get("ClusterEnabled", False)),
        )

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "RedisEndpoints":
        return cls.from_dict(json.loads(text))

    def __str__(self) -> str:
        return self.to_json()
