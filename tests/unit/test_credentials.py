#!/usr/bin/env python3
"""Test credential provider descriptors and their botocore providers."""

import os
import sys
from unittest.mock import patch

from botocore.credentials import RefreshableCredentials
from botocore.utils import InstanceMetadataFetcher

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from elasticache_endpoints.core.credentials import (
    INSTANCE_ROLE_EXPIRY_WINDOW,
    METADATA_TIMEOUT_SECONDS,
    InstanceRoleCredentials,
    ShortExpiryInstanceMetadataProvider,
)


def create_role_metadata():
    return {
        "role_name": "cache-reader",
        "access_key": "ASIAEXAMPLE",
        "secret_key": "role-secret",
        "token": "role-token",
        "expiry_time": "2099-01-01T00:00:00Z",
    }


def test_instance_role_fetcher_uses_short_timeout():
    provider = InstanceRoleCredentials().build()

    assert isinstance(provider, ShortExpiryInstanceMetadataProvider)
    assert provider._role_fetcher._timeout == METADATA_TIMEOUT_SECONDS == 3.0
    assert provider._role_fetcher._num_attempts == 1


def test_instance_role_fetcher_honours_overrides():
    provider = InstanceRoleCredentials(timeout=0.5, num_attempts=2).build()

    assert provider._role_fetcher._timeout == 0.5
    assert provider._role_fetcher._num_attempts == 2


def test_instance_role_credentials_refresh_near_expiry():
    provider = InstanceRoleCredentials().build()

    with patch.object(
        InstanceMetadataFetcher,
        "retrieve_iam_role_credentials",
        return_value=create_role_metadata(),
    ):
        creds = provider.load()

    assert isinstance(creds, RefreshableCredentials)
    assert creds.method == "iam-role"
    assert creds._advisory_refresh_timeout == INSTANCE_ROLE_EXPIRY_WINDOW == 3
    assert creds._mandatory_refresh_timeout == INSTANCE_ROLE_EXPIRY_WINDOW
    assert creds.get_frozen_credentials().access_key == "ASIAEXAMPLE"


def test_instance_role_custom_expiry_window():
    provider = InstanceRoleCredentials(expiry_window=60).build()

    with patch.object(
        InstanceMetadataFetcher,
        "retrieve_iam_role_credentials",
        return_value=create_role_metadata(),
    ):
        creds = provider.load()

    assert creds._advisory_refresh_timeout == 60
    assert creds._mandatory_refresh_timeout == 60


def test_instance_role_without_metadata_yields_nothing():
    provider = InstanceRoleCredentials().build()

    with patch.object(InstanceMetadataFetcher, "retrieve_iam_role_credentials", return_value={}):
        assert provider.load() is None
