#!/usr/bin/env python3
"""Test the ElastiCache data source."""

import os
import sys
from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError, NoCredentialsError

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from elasticache_endpoints.core.config import AWSConfig
from elasticache_endpoints.core.error_handling import (
    ErrorHandler,
    InvalidInputError,
    SessionError,
    UpstreamError,
)
from elasticache_endpoints.data_sources.elasticache_client import (
    ElastiCacheClient,
    ReplicationGroupLookupResult,
)


def test_lookup_counts_groups():
    client = Mock()
    client.describe_replication_groups.return_value = {
        "ReplicationGroups": [{"ReplicationGroupId": "a"}, {"ReplicationGroupId": "a"}]
    }

    result = ElastiCacheClient(client=client).describe_replication_group("a")

    assert result.count == 2
    assert len(result.replication_groups) == 2


def test_not_found_fault_is_zero_count():
    client = Mock()
    client.describe_replication_groups.side_effect = ClientError(
        {"Error": {"Code": "ReplicationGroupNotFoundFault", "Message": "missing"}},
        "DescribeReplicationGroups",
    )

    result = ElastiCacheClient(client=client).describe_replication_group("missing")

    assert result == ReplicationGroupLookupResult(response=None, count=0)
    assert result.replication_groups == []


def test_access_denied_is_upstream_error():
    client = Mock()
    client.describe_replication_groups.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
        "DescribeReplicationGroups",
    )

    with pytest.raises(UpstreamError) as excinfo:
        ElastiCacheClient(client=client).describe_replication_group("sessions")

    assert excinfo.value.category == "authentication"


def test_missing_credentials_is_upstream_error():
    client = Mock()
    client.describe_cache_clusters.side_effect = NoCredentialsError()

    with pytest.raises(UpstreamError) as excinfo:
        ElastiCacheClient(client=client).describe_cache_clusters("sessions")

    assert excinfo.value.category == "authentication"


def test_cache_clusters_request_node_info():
    client = Mock()
    client.describe_cache_clusters.return_value = {"CacheClusters": []}

    assert ElastiCacheClient(client=client).describe_cache_clusters("c") == []
    client.describe_cache_clusters.assert_called_once_with(
        CacheClusterId="c", ShowCacheNodeInfo=True
    )


def test_empty_identifier_is_rejected():
    client = Mock()
    source = ElastiCacheClient(client=client)

    with pytest.raises(InvalidInputError):
        source.describe_replication_group("")
    with pytest.raises(InvalidInputError):
        source.describe_cache_clusters("")
    client.describe_replication_groups.assert_not_called()
    client.describe_cache_clusters.assert_not_called()


def test_client_is_built_lazily_once():
    config = AWSConfig().with_static("AKIAEXAMPLE", "secret")
    built = Mock()

    with patch.object(AWSConfig, "client", return_value=built) as factory:
        source = ElastiCacheClient(config=config)
        factory.assert_not_called()

        assert source.get_client() is built
        assert source.get_client() is built

    factory.assert_called_once_with("elasticache")


def test_get_client_without_config():
    with pytest.raises(SessionError):
        ElastiCacheClient().get_client()


def test_get_client_when_session_fails():
    with patch.object(AWSConfig, "client", return_value=None):
        with pytest.raises(SessionError):
            ElastiCacheClient(config=AWSConfig()).get_client()


def test_get_client_builds_real_client():
    config = AWSConfig().with_region("eu-west-1").with_static("AKIAEXAMPLE", "secret")

    client = ElastiCacheClient(config=config).get_client()

    assert client.meta.service_model.service_name == "elasticache"
    assert client.meta.region_name == "eu-west-1"


@pytest.mark.parametrize(
    "message,category",
    [
        ("Rate exceeded", "throttling"),
        ("Read timeout on endpoint URL", "network"),
        ("503 Service Unavailable", "service_unavailable"),
        ("User is not authorized: 403", "authentication"),
        ("Cluster does not exist", "not_found"),
        ("Invalid parameter combination", "validation"),
        ("something odd", "unknown"),
    ],
)
def test_classify_aws_error(message, category):
    assert ErrorHandler().classify_aws_error(Exception(message))[1] == category


@pytest.mark.parametrize(
    "code,message,expected",
    [
        ("InvalidParameterValue", "Bad cluster id 'timeout-cache'", (False, "validation")),
        ("ThrottlingException", "Cluster not found in cache", (True, "throttling")),
        ("CacheClusterNotFound", "Access denied to connection", (False, "not_found")),
        ("InvalidClientTokenId", "The security token is invalid", (False, "authentication")),
        ("SomethingNew", "network timeout", (True, "unknown")),
    ],
)
def test_classify_prefers_error_code_over_message(code, message, expected):
    error = ClientError({"Error": {"Code": code, "Message": message}}, "DescribeCacheClusters")

    assert ErrorHandler().classify_aws_error(error) == expected


def test_cluster_name_in_message_does_not_make_error_retryable():
    client = Mock()
    client.describe_cache_clusters.side_effect = ClientError(
        {"Error": {"Code": "InvalidParameterValue", "Message": "Invalid id timeout-cache"}},
        "DescribeCacheClusters",
    )

    with pytest.raises(UpstreamError) as excinfo:
        ElastiCacheClient(client=client).describe_cache_clusters("timeout-cache")

    assert excinfo.value.category == "validation"
