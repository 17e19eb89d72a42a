"""AWS client factories for MediaConvert.

MediaConvert is reached in two steps: a client against the regional
control plane discovers the account-specific endpoint, and a second client
bound to that endpoint submits jobs. Both share one botocore configuration.
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

# Single attempt per call, no client-side retries
AWS_CONFIG = Config(
    retries={
        "total_max_attempts": 1,
        "mode": "standard",
    },
    connect_timeout=5,
    read_timeout=30,
)


def get_control_plane_client(region: str) -> Any:
    """Get a MediaConvert client for the region's default control-plane address.

    Used once per invocation for DescribeEndpoints, so it is not cached.

    Args:
        region: AWS region code (e.g. 'us-east-1')

    Returns:
        boto3 MediaConvert client
    """
    return boto3.client(
        "mediaconvert",
        region_name=region,
        config=AWS_CONFIG,
    )


@lru_cache(maxsize=8)
def get_mediaconvert_client(endpoint_url: str, region: str) -> Any:
    """Get cached MediaConvert client bound to an account-specific endpoint.

    boto3 clients are thread-safe once created, but creating them is not, so
    callers fanning out across threads must obtain the client first.

    Args:
        endpoint_url: Endpoint returned by DescribeEndpoints
        region: AWS region code the endpoint belongs to

    Returns:
        boto3 MediaConvert client with account-specific endpoint
    """
    return boto3.client(
        "mediaconvert",
        region_name=region,
        endpoint_url=endpoint_url,
        config=AWS_CONFIG,
    )


def available_regions() -> set[str]:
    """Return every region botocore knows MediaConvert to be available in."""
    session = boto3.session.Session()
    regions: set[str] = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions("mediaconvert", partition_name=partition))
    return regions


def clear_client_cache() -> None:
    """Clear all cached AWS clients.

    Useful for testing when mocking needs to be reset.
    """
    get_mediaconvert_client.cache_clear()
