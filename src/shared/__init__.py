"""Shared utilities for the VOD transcode trigger."""

from .config import Settings, get_settings
from .exceptions import (
    TranscodingPipelineError,
    ConfigurationError,
    EndpointResolutionError,
    JobSubmissionError,
)
from .models import (
    ObjectReference,
    RenditionDescriptor,
    EndpointResolution,
    SubmissionStatus,
    SubmissionOutcome,
    BatchReport,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "TranscodingPipelineError",
    "ConfigurationError",
    "EndpointResolutionError",
    "JobSubmissionError",
    # Models
    "ObjectReference",
    "RenditionDescriptor",
    "EndpointResolution",
    "SubmissionStatus",
    "SubmissionOutcome",
    "BatchReport",
]
