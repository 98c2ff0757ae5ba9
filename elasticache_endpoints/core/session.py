"""boto3 session and client construction from an AWSConfig."""

import os
from typing import Optional

import boto3
import botocore.session
from botocore.config import Config as BotocoreConfig
from botocore.exceptions import BotoCoreError

from .credentials import build_resolver
from .error_handling import SessionError
from .logging import get_logger

DEFAULT_REGION = "us-east-1"
REGION_ENV_VAR = "AWS_DEFAULT_REGION"

logger = get_logger("session")


def resolve_region(region: Optional[str]) -> str:
    """Explicit region, then AWS_DEFAULT_REGION, then us-east-1."""
    if region:
        return region
    env_region = os.environ.get(REGION_ENV_VAR)
    if env_region:
        return env_region
    return DEFAULT_REGION


def _fail(config, message: str, error: Optional[Exception] = None):
    """Apply the config's error policy: raise when panic_on_error, else return None."""
    logger.error(message, region=resolve_region(config.aws_region))
    if config.panic_on_error:
        raise SessionError(message) from error
    return None


def build_session(config) -> Optional[boto3.Session]:
    """Materialize a boto3 session whose credentials come from the config's provider chain.

    Args:
        config: AWSConfig with region, providers and error policy

    Returns:
        boto3.Session, or None when construction fails and panic_on_error is off

    Raises:
        SessionError: If construction fails and panic_on_error is on
    """
    region = resolve_region(config.aws_region)

    try:
        resolver = build_resolver(config.providers)
    except (BotoCoreError, ValueError) as e:
        return _fail(config, f"Error building credential providers: {e}", e)

    try:
        core_session = botocore.session.Session()
        core_session.register_component("credential_provider", resolver)
        session = boto3.Session(botocore_session=core_session, region_name=region)
    except BotoCoreError as e:
        return _fail(config, f"Error on connecting to AWS: {e}", e)

    logger.debug(
        "Created boto3 session",
        region=region,
        endpoint=config.aws_endpoint or "default",
        providers=len(config.providers),
    )
    return session


def client_config(config) -> BotocoreConfig:
    """botocore client settings (retries, timeouts) derived from the config."""
    return BotocoreConfig(
        retries={"max_attempts": config.max_retries, "mode": "standard"},
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
    )


def build_client(config, service: str = "elasticache"):
    """Create a service client from a freshly built session.

    Returns None under the same conditions as :func:`build_session`.
    """
    session = build_session(config)
    if session is None:
        return None

    try:
        client = session.client(
            service,
            endpoint_url=config.aws_endpoint or None,
            config=client_config(config),
        )
    except (BotoCoreError, ValueError) as e:
        return _fail(config, f"Error creating {service} client: {e}", e)

    logger.info(
        f"Initialized {service} client",
        region=session.region_name,
        endpoint=config.aws_endpoint or "default",
    )
    return client
