"""Pytest configuration and shared fixtures.

This module provides:
- Dummy AWS credentials and application environment
- Settings and Lambda context fixtures
- Sample S3 events
- Fake MediaConvert clients
"""

import os
from dataclasses import dataclass
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

# Set dummy AWS credentials BEFORE importing any application code
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

# Powertools
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_METRICS_NAMESPACE"] = "VodTranscoding"

# Set application environment variables
os.environ["DESTINATION_BUCKET"] = "out"
os.environ["MEDIACONVERT_ROLE"] = "arn:role:mc"
os.environ["REGION"] = "us-east-1"
os.environ["LOG_LEVEL"] = "DEBUG"

ENDPOINT_URL = "https://abc123.mediaconvert.us-east-1.amazonaws.com"


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Any:
    """Settings matching the reference end-to-end scenario."""
    from src.shared.config import Settings

    return Settings(
        destination_bucket="out",
        mediaconvert_role_arn="arn:role:mc",
        region="us-east-1",
    )


@pytest.fixture(autouse=True)
def reset_caches() -> Generator[None, None, None]:
    """Clear cached settings and clients around every test."""
    from src.shared.aws_clients import clear_client_cache
    from src.shared.config import clear_settings_cache

    clear_settings_cache()
    clear_client_cache()
    yield
    clear_settings_cache()
    clear_client_cache()


# =============================================================================
# Lambda Fixtures
# =============================================================================


@dataclass
class FakeLambdaContext:
    function_name: str = "vod-transcode-trigger"
    memory_limit_in_mb: int = 256
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:vod-transcode-trigger"
    aws_request_id: str = "test-request-id"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Minimal Lambda context accepted by Powertools."""
    return FakeLambdaContext()


# =============================================================================
# S3 Event Fixtures
# =============================================================================


def make_s3_record(bucket: str, key: str, etag: str | None = None) -> dict:
    """Build one S3 ObjectCreated record."""
    s3_object: dict[str, Any] = {"key": key, "size": 1048576, "sequencer": "0055AED6DCD90281E5"}
    if etag:
        s3_object["eTag"] = etag
    return {
        "eventVersion": "2.1",
        "eventSource": "aws:s3",
        "awsRegion": "us-east-1",
        "eventTime": "2024-01-15T10:00:00.000Z",
        "eventName": "ObjectCreated:Put",
        "s3": {
            "s3SchemaVersion": "1.0",
            "configurationId": "vod-upload",
            "bucket": {
                "name": bucket,
                "arn": f"arn:aws:s3:::{bucket}",
            },
            "object": s3_object,
        },
    }


@pytest.fixture
def s3_put_event() -> dict:
    """S3 event with a single upload (bucket 'src', key 'clip.mp4')."""
    return {"Records": [make_s3_record("src", "clip.mp4")]}


@pytest.fixture
def s3_batch_event() -> dict:
    """S3 event with three uploads."""
    return {
        "Records": [
            make_s3_record("src", "episode-01.mp4", etag="0123456789abcdef0123456789abcdef"),
            make_s3_record("src", "episode-02.mp4"),
            make_s3_record("src", "episode-03.mov"),
        ]
    }


# =============================================================================
# MediaConvert Fixtures
# =============================================================================


@pytest.fixture
def mediaconvert_client() -> MagicMock:
    """Fake endpoint-bound MediaConvert client accepting every job."""
    client = MagicMock()
    counter = iter(range(1, 1000))

    def create_job(**kwargs: Any) -> dict:
        return {"Job": {"Id": f"1700000000000-{next(counter):06d}", "Role": kwargs["Role"]}}

    client.create_job.side_effect = create_job
    return client
