"""Configuration management for ElastiCache endpoint resolution.

``AWSConfig`` is an immutable builder: every ``with_*`` call returns a new
config, so a chain reads like the fluent setup it replaces without sharing
mutable state between callers::

    config = (
        AWSConfig()
        .with_region("eu-west-1")
        .with_credentials("AKIA...", "secret")
        .with_default_providers()
    )
    client = config.client("elasticache")
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .credentials import (
    ContainerRoleCredentials,
    DEFAULT_PROFILE,
    EnvironmentCredentials,
    FileCredentials,
    InstanceRoleCredentials,
    StaticCredentials,
)
from .error_handling import InvalidInputError
from .logging import get_logger
from .session import build_client, build_session, resolve_region

logger = get_logger("config")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _require(value: Optional[str], what: str) -> str:
    if value is None or not value.strip():
        message = f"No {what} provided"
        logger.warning(message)
        raise InvalidInputError(message)
    return value.strip()


@dataclass(frozen=True)
class AWSConfig:
    """Configuration settings for AWS sessions and endpoint resolution."""

    # AWS Settings
    aws_region: Optional[str] = None
    aws_endpoint: Optional[str] = None
    aws_access_key: Optional[str] = field(default=None, repr=False)
    aws_secret_key: Optional[str] = field(default=None, repr=False)
    aws_session_token: Optional[str] = field(default=None, repr=False)
    aws_cred_file: Optional[str] = None
    aws_profile: Optional[str] = None

    # Ordered credential chain
    providers: Tuple = ()

    # Error policy
    panic_on_error: bool = False

    # Client Settings
    max_retries: int = 3
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    # Resolution Settings
    include_primary_in_readers: bool = True

    @classmethod
    def from_env(cls) -> "AWSConfig":
        """Create config from environment variables."""
        return cls(
            aws_region=os.getenv("AWS_DEFAULT_REGION") or None,
            aws_endpoint=os.getenv("AWS_ENDPOINT_URL") or None,
            aws_cred_file=os.getenv("AWS_SHARED_CREDENTIALS_FILE") or None,
            aws_profile=os.getenv("AWS_PROFILE") or None,
            panic_on_error=_env_flag("ELASTICACHE_PANIC_ON_ERROR", False),
            max_retries=int(os.getenv("ELASTICACHE_MAX_RETRIES", "3")),
            include_primary_in_readers=_env_flag(
                "ELASTICACHE_INCLUDE_PRIMARY_IN_READERS", True
            ),
        )

    @classmethod
    def from_args(cls, args) -> "AWSConfig":
        """Create config from command line arguments."""
        config = cls.from_env()

        # Override with CLI arguments if provided
        if getattr(args, "region", None):
            config = config.with_region(args.region)
        if getattr(args, "endpoint_url", None):
            config = config.with_endpoint(args.endpoint_url)
        if getattr(args, "credentials_file", None):
            config = replace(config, aws_cred_file=args.credentials_file)
        if getattr(args, "profile", None):
            config = replace(config, aws_profile=args.profile)
        if getattr(args, "panic", False):
            config = config.enable_panic()
        if getattr(args, "exclude_primary_reader", False):
            config = replace(config, include_primary_in_readers=False)

        return config

    @property
    def region(self) -> str:
        """Effective region: explicit, then AWS_DEFAULT_REGION, then us-east-1."""
        return resolve_region(self.aws_region)

    def with_region(self, region: str) -> "AWSConfig":
        """Set the AWS region.

        Raises:
            InvalidInputError: If region is empty
        """
        return replace(self, aws_region=_require(region, "AWS region"))

    def with_endpoint(self, endpoint_url: str) -> "AWSConfig":
        """Set an endpoint override (LocalStack, VPC endpoints).

        Raises:
            InvalidInputError: If endpoint_url is empty
        """
        return replace(self, aws_endpoint=_require(endpoint_url, "AWS endpoint"))

    def with_credentials(
        self, access_key: str, secret_key: str, session_token: Optional[str] = None
    ) -> "AWSConfig":
        """Store a static key pair for later use by :meth:`with_static`."""
        return replace(
            self,
            aws_access_key=_require(access_key, "AWS access key"),
            aws_secret_key=_require(secret_key, "AWS secret key"),
            aws_session_token=session_token or None,
        )

    def enable_panic(self) -> "AWSConfig":
        """Raise SessionError on session/client construction failures."""
        return replace(self, panic_on_error=True)

    def disable_panic(self) -> "AWSConfig":
        """Log construction failures and return None instead of raising."""
        return replace(self, panic_on_error=False)

    def _append(self, descriptor) -> "AWSConfig":
        return replace(self, providers=self.providers + (descriptor,))

    def with_static(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        session_token: Optional[str] = None,
    ) -> "AWSConfig":
        """Append a static key pair provider.

        Falls back to the keys stored with :meth:`with_credentials`. When no
        complete key pair is available the config is returned unchanged.
        """
        access_key = access_key or self.aws_access_key
        secret_key = secret_key or self.aws_secret_key
        session_token = session_token or self.aws_session_token

        if not access_key or not secret_key:
            logger.warning("No static AWS credentials found")
            return self

        return self._append(StaticCredentials(access_key, secret_key, session_token or None))

    def with_env(self) -> "AWSConfig":
        """Append the environment variable provider."""
        return self._append(EnvironmentCredentials())

    def with_file(
        self, path: Optional[str] = None, profile: Optional[str] = None
    ) -> "AWSConfig":
        """Append a shared credentials file provider.

        Args:
            path: Credentials file; defaults to aws_cred_file, then ~/.aws/credentials
            profile: Profile section; defaults to aws_profile, then "default"
        """
        return self._append(
            FileCredentials(
                path=path or self.aws_cred_file or None,
                profile=profile or self.aws_profile or DEFAULT_PROFILE,
            )
        )

    def with_instance_role(self) -> "AWSConfig":
        """Append the container role and EC2 instance role providers."""
        return self._append(ContainerRoleCredentials())._append(InstanceRoleCredentials())

    def with_default_providers(self) -> "AWSConfig":
        """Append static (if keys set), env, file and instance role providers, in that order."""
        config = self
        if self.aws_access_key and self.aws_secret_key:
            config = config.with_static()
        return config.with_env().with_file().with_instance_role()

    def session(self):
        """Build a boto3 session; see :func:`~elasticache_endpoints.core.session.build_session`."""
        return build_session(self)

    def client(self, service: str = "elasticache"):
        """Build a service client honouring the endpoint override and retry settings."""
        return build_client(self, service)
