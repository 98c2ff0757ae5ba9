"""Credential provider descriptors and their botocore counterparts.

Descriptors are plain values stored on :class:`~elasticache_endpoints.core.config.AWSConfig`.
Nothing touches the environment, the credentials file or the metadata service
until :func:`build_resolver` turns them into a botocore ``CredentialResolver``
at session-build time.
"""

import os
from dataclasses import dataclass
from typing import Optional, Sequence

from botocore.credentials import (
    ContainerProvider,
    CredentialProvider,
    CredentialResolver,
    Credentials,
    EnvProvider,
    InstanceMetadataProvider,
    RefreshableCredentials,
    SharedCredentialProvider,
)
from botocore.utils import InstanceMetadataFetcher

from .logging import get_logger

DEFAULT_PROFILE = "default"
DEFAULT_CREDENTIALS_FILE = "~/.aws/credentials"
METADATA_TIMEOUT_SECONDS = 3.0
INSTANCE_ROLE_EXPIRY_WINDOW = 3

logger = get_logger("credentials")


def default_credentials_file() -> str:
    """AWS_SHARED_CREDENTIALS_FILE, else ~/.aws/credentials."""
    return os.environ.get("AWS_SHARED_CREDENTIALS_FILE") or DEFAULT_CREDENTIALS_FILE


class StaticCredentialProvider(CredentialProvider):
    """Credential provider returning a fixed key pair."""

    METHOD = "static"
    CANONICAL_NAME = "Static"

    def __init__(self, access_key: str, secret_key: str, session_token: Optional[str] = None):
        self._access_key = access_key
        self._secret_key = secret_key
        self._session_token = session_token

    def load(self):
        return Credentials(
            self._access_key,
            self._secret_key,
            self._session_token,
            method=self.METHOD,
        )


class ShortExpiryInstanceMetadataProvider(InstanceMetadataProvider):
    """Instance role provider that refreshes only when credentials are about to expire.

    ``expiry_window`` is the number of seconds before expiration at which the
    credentials are considered stale.
    """

    def __init__(self, iam_role_fetcher, expiry_window: int = INSTANCE_ROLE_EXPIRY_WINDOW):
        super().__init__(iam_role_fetcher=iam_role_fetcher)
        self.expiry_window = expiry_window

    def load(self):
        creds = super().load()
        if isinstance(creds, RefreshableCredentials):
            creds._advisory_refresh_timeout = self.expiry_window
            creds._mandatory_refresh_timeout = self.expiry_window
        return creds


@dataclass(frozen=True)
class StaticCredentials:
    access_key: str
    secret_key: str
    session_token: Optional[str] = None

    name = "static"

    def build(self) -> CredentialProvider:
        return StaticCredentialProvider(self.access_key, self.secret_key, self.session_token)

    def __repr__(self) -> str:
        # Never render the secret key
        return f"StaticCredentials(access_key={self.access_key!r}, session_token={'set' if self.session_token else None})"


@dataclass(frozen=True)
class EnvironmentCredentials:
    """Reads AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY / AWS_SESSION_TOKEN when resolved."""

    name = "env"

    def build(self) -> CredentialProvider:
        return EnvProvider()


@dataclass(frozen=True)
class FileCredentials:
    """Shared credentials file; ``path=None`` means the standard ~/.aws/credentials lookup."""

    path: Optional[str] = None
    profile: str = DEFAULT_PROFILE

    name = "shared-credentials-file"

    def build(self) -> CredentialProvider:
        return SharedCredentialProvider(
            profile_name=self.profile or DEFAULT_PROFILE,
            creds_filename=self.path or default_credentials_file(),
        )


@dataclass(frozen=True)
class ContainerRoleCredentials:
    """Remote credentials endpoint used by ECS task roles."""

    name = "container-role"

    def build(self) -> CredentialProvider:
        return ContainerProvider()


@dataclass(frozen=True)
class InstanceRoleCredentials:
    """EC2 instance role via the metadata service, with a low timeout."""

    timeout: float = METADATA_TIMEOUT_SECONDS
    num_attempts: int = 1
    expiry_window: int = INSTANCE_ROLE_EXPIRY_WINDOW

    name = "iam-role"

    def build(self) -> CredentialProvider:
        fetcher = InstanceMetadataFetcher(timeout=self.timeout, num_attempts=self.num_attempts)
        return ShortExpiryInstanceMetadataProvider(fetcher, expiry_window=self.expiry_window)


def build_resolver(descriptors: Sequence) -> CredentialResolver:
    """Build a botocore credential chain from provider descriptors, in order.

    The first provider whose ``load()`` returns credentials wins. An empty
    sequence yields a resolver that never finds credentials.
    """
    providers = [descriptor.build() for descriptor in descriptors]
    logger.debug(
        "Built credential chain",
        providers=",".join(descriptor.name for descriptor in descriptors) or "none",
    )
    return CredentialResolver(providers=providers)
