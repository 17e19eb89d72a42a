"""Pydantic models for data validation and serialization.

This module defines the core data structures used by the transcode trigger:
- Source object references taken from S3 events
- Rendition descriptors for the output ladder
- Result types for endpoint resolution and job submission
- The per-batch report returned by the handler

All models use Pydantic v2 for validation and serialization.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import EndpointResolutionError, JobSubmissionError


class ObjectReference(BaseModel):
    """A source media object identified by bucket and key."""

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(
        min_length=1,
        description="S3 bucket holding the source object",
    )
    key: str = Field(
        min_length=1,
        description="Object key (already URL-decoded)",
    )
    etag: str | None = Field(
        default=None,
        description="Object ETag from the event, when the event carried one",
    )

    @property
    def source_uri(self) -> str:
        """Return the S3 URI MediaConvert reads from (e.g. 's3://bucket/key')."""
        return f"s3://{self.bucket}/{self.key}"


class RenditionDescriptor(BaseModel):
    """One named output variant produced by a transcoding job.

    Example:
        >>> RenditionDescriptor(
        ...     preset="System-Avc_16x9_1080p_29_97fps_8500kbps",
        ...     extension="hls",
        ...     name_modifier="_HLS1080",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    preset: str = Field(
        min_length=1,
        description="MediaConvert preset name (system or custom)",
    )
    extension: str = Field(
        min_length=1,
        max_length=16,
        description="File extension of the rendition (e.g. 'hls', 'mp4')",
    )
    name_modifier: str = Field(
        min_length=1,
        max_length=64,
        description="Suffix appended to output file names (e.g. '_HLS1080')",
    )
    container: str | None = Field(
        default=None,
        pattern=r"^[A-Z0-9_]+$",
        description="Container override (e.g. 'M3U8', 'MP4'); the preset's when unset",
    )


class EndpointResolution(BaseModel):
    """Result of resolving the regional MediaConvert endpoint.

    Exactly one of ``endpoint`` or ``error_code`` is set.
    """

    model_config = ConfigDict(frozen=True)

    region: str = Field(
        description="Region the endpoint was requested for",
    )
    endpoint: str | None = Field(
        default=None,
        description="Account-specific endpoint URL",
    )
    error_code: str | None = Field(
        default=None,
        description="Error code if resolution failed",
    )
    error_message: str | None = Field(
        default=None,
        description="Error message if resolution failed",
    )

    @property
    def ok(self) -> bool:
        """Check if an endpoint was resolved."""
        return self.endpoint is not None and self.error_code is None

    def raise_for_error(self) -> str:
        """Return the endpoint, raising EndpointResolutionError on failure."""
        if not self.ok:
            raise EndpointResolutionError(
                self.error_message or "MediaConvert endpoint could not be resolved",
                error_code=self.error_code or "ENDPOINT_RESOLUTION_ERROR",
                details={"region": self.region},
            )
        return self.endpoint  # type: ignore[return-value]


class SubmissionStatus(str, Enum):
    """Outcome of a single job submission."""

    SUBMITTED = "SUBMITTED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class SubmissionOutcome(BaseModel):
    """Result of submitting (or declining to submit) one object's job."""

    model_config = ConfigDict(frozen=True)

    source: ObjectReference = Field(
        description="Object the job was built for",
    )
    status: SubmissionStatus = Field(
        description="Submission status",
    )
    job_id: str | None = Field(
        default=None,
        description="MediaConvert job ID when the job was accepted",
    )

    # Error information
    error_code: str | None = Field(
        default=None,
        description="Error code if the submission failed or was skipped",
    )
    error_message: str | None = Field(
        default=None,
        description="Error message if the submission failed or was skipped",
    )

    @property
    def is_success(self) -> bool:
        """Check if MediaConvert accepted the job."""
        return self.status == SubmissionStatus.SUBMITTED

    def raise_for_error(self) -> str:
        """Return the job ID, raising JobSubmissionError on failure."""
        if not self.is_success:
            raise JobSubmissionError(
                self.error_message or f"Job for {self.source.source_uri} was not submitted",
                error_code=self.error_code or "JOB_SUBMISSION_ERROR",
                details={"source_uri": self.source.source_uri},
            )
        return self.job_id  # type: ignore[return-value]


class BatchReport(BaseModel):
    """Per-item outcomes of one trigger batch, in input order."""

    model_config = ConfigDict(frozen=True)

    region: str = Field(
        description="Region the batch was submitted in",
    )
    endpoint: str | None = Field(
        default=None,
        description="Endpoint shared by every submission of the batch",
    )
    outcomes: list[SubmissionOutcome] = Field(
        default=[],
        description="One outcome per object reference",
    )

    @property
    def submitted_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == SubmissionStatus.SUBMITTED)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == SubmissionStatus.FAILED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == SubmissionStatus.SKIPPED)

    @property
    def all_succeeded(self) -> bool:
        """True when every object in the batch got a job."""
        return all(o.is_success for o in self.outcomes)

    def to_response(self) -> dict[str, Any]:
        """Summarize the batch as a JSON-safe dictionary."""
        return {
            "region": self.region,
            "endpoint": self.endpoint,
            "submitted": self.submitted_count,
            "failed": self.failed_count,
            "skipped": self.skipped_count,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }
