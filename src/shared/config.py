"""Environment-aware configuration with validation.

This module provides centralized configuration management using Pydantic Settings.
All environment variables are validated when the handler starts so that a
misconfigured function fails fast instead of submitting jobs with blank values.

Earlier deployments set the variables ``DestinationBucket``,
``MediaConvertRole`` and ``Region``; those are still accepted next to the
upper-case names.
"""

import re
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import RenditionDescriptor

REGION_PATTERN = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d{1,2}$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    ``destination_bucket``, ``mediaconvert_role_arn`` and ``region`` are
    required. Everything else has a working default.

    Example:
        >>> settings = Settings(
        ...     destination_bucket="vod-output",
        ...     mediaconvert_role_arn="arn:aws:iam::123456789012:role/MediaConvert",
        ...     region="us-east-1",
        ... )
        >>> settings.max_concurrency is None
        True
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Required
    destination_bucket: str = Field(
        min_length=3,
        max_length=63,
        validation_alias=AliasChoices("DESTINATION_BUCKET", "DestinationBucket"),
        description="S3 bucket receiving transcoded renditions",
    )
    mediaconvert_role_arn: str = Field(
        min_length=1,
        validation_alias=AliasChoices(
            "MEDIACONVERT_ROLE",
            "MediaConvertRole",
            "MEDIACONVERT_ROLE_ARN",
        ),
        description="IAM role MediaConvert assumes to read and write S3",
    )
    # AWS_REGION is set by the Lambda runtime and is not read here
    region: str = Field(
        validation_alias=AliasChoices("REGION", "Region"),
        description="AWS region used to discover the MediaConvert endpoint",
    )

    # Optional MediaConvert configuration
    mediaconvert_queue_arn: str = Field(
        default="",
        validation_alias=AliasChoices("MEDIACONVERT_QUEUE_ARN"),
        description="MediaConvert queue ARN (account default queue when empty)",
    )
    renditions: list[RenditionDescriptor] = Field(
        default_factory=list,
        validation_alias=AliasChoices("RENDITIONS"),
        description="Output ladder as JSON; the built-in ladder is used when empty",
    )

    # Fan-out
    max_concurrency: int | None = Field(
        default=None,
        ge=1,
        le=100,
        validation_alias=AliasChoices("MAX_CONCURRENCY"),
        description="Cap on concurrent CreateJob calls (unbounded when unset)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL"),
        description="Logging level",
    )

    @field_validator("destination_bucket", mode="before")
    @classmethod
    def strip_bucket_uri(cls, v: str) -> str:
        """Accept ``s3://bucket`` as well as a bare bucket name."""
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("s3://"):
                v = v[len("s3://"):]
            return v.rstrip("/")
        return v

    @field_validator("mediaconvert_role_arn", "mediaconvert_queue_arn", mode="before")
    @classmethod
    def validate_arn_format(cls, v: str) -> str:
        """Validate ARN format."""
        if v and not v.startswith("arn:"):
            raise ValueError("Invalid ARN format - must start with 'arn:'")
        return v

    @field_validator("region", mode="before")
    @classmethod
    def validate_region_format(cls, v: str) -> str:
        """Ensure the region looks like an AWS region code (e.g. 'us-east-1')."""
        if isinstance(v, str):
            v = v.strip().lower()
            if not REGION_PATTERN.match(v):
                raise ValueError(f"'{v}' is not a valid AWS region code")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached for the lifetime of the process.
    A failed load is not cached, so a fixed environment is picked up on the
    next invocation.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If required environment variables are missing or invalid
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(e) from e


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
