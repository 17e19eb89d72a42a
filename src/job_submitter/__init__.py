"""Job submitter module for the VOD transcode trigger.

This module handles MediaConvert job creation for S3 uploads:
- Endpoint discovery
- Rendition ladder and job settings builder
- Concurrent job submission
- Lambda handler
"""

from .endpoint import resolve_endpoint
from .job_builder import build_job_settings
from .orchestrator import BatchOrchestrator
from .renditions import DEFAULT_RENDITIONS
from .submitter import submit_job

__all__ = [
    "resolve_endpoint",
    "build_job_settings",
    "BatchOrchestrator",
    "DEFAULT_RENDITIONS",
    "submit_job",
]
