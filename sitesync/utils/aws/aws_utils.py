"""AWS utilities for session management.

Builds the boto3 session and the single S3 client that is handed to
:class:`~sitesync.services.aws.operations.S3Operations`. Nothing in
sitesync keeps a module-level client.
"""
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ProfileNotFound

from ...exceptions import ConfigError
from ..logger import get_logger

log = get_logger(__name__)


def create_boto3_session(
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None
):
    """Create a boto3 session.

    Args:
        profile_name: AWS profile name, ``None``/empty for the default chain
        region_name: Optional AWS region

    Returns:
        boto3.Session object

    Raises:
        ConfigError: If the named profile does not exist

    Example:
        >>> session = create_boto3_session('deploy', 'us-west-2')
        >>> s3 = session.client('s3')
    """
    try:
        return boto3.Session(
            profile_name=profile_name or None,
            region_name=region_name or None,
        )
    except ProfileNotFound as e:
        raise ConfigError(f"AWS profile '{profile_name}' not found: {e}") from e


def create_s3_client(config: dict, session=None):
    """Create an S3 client from the sitesync configuration.

    The client uses bounded connect/read timeouts and botocore's standard
    retry mode, so a single slow call cannot stall the run forever.

    Args:
        config: Merged configuration dictionary
        session: Optional pre-built boto3 session

    Returns:
        botocore S3 client
    """
    if session is None:
        session = create_boto3_session(
            config.get('aws_profile'),
            config.get('aws_region'),
        )

    boto_config = BotoConfig(
        connect_timeout=config.get('connect_timeout', 10),
        read_timeout=config.get('read_timeout', 60),
        retries={"max_attempts": config.get('max_attempts', 3), "mode": "standard"},
        max_pool_connections=max(10, config.get('max_workers', 10)),
    )

    kwargs = {"config": boto_config}
    endpoint_url = (config.get('endpoint_url') or '').strip()
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url

    log.debug(
        "Creating S3 client (profile=%s, region=%s, endpoint=%s)",
        config.get('aws_profile') or 'default',
        session.region_name or 'default',
        endpoint_url or 'default',
    )
    return session.client('s3', **kwargs)
