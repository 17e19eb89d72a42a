"""Batch orchestration: one MediaConvert job per object in a trigger batch.

Flow:
1. Resolve the MediaConvert endpoint (once per batch)
2. Build job settings for every object
3. Submit all jobs concurrently
4. Wait for every submission and report one outcome per object

A batch whose endpoint cannot be resolved is aborted: every object is
reported as SKIPPED and no CreateJob call is made.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Sequence

from aws_lambda_powertools import Logger

from ..shared.aws_clients import get_mediaconvert_client
from ..shared.config import Settings
from ..shared.exceptions import ConfigurationError
from ..shared.models import (
    BatchReport,
    EndpointResolution,
    ObjectReference,
    SubmissionOutcome,
    SubmissionStatus,
)
from .endpoint import resolve_endpoint
from .job_builder import build_job_settings
from .renditions import resolve_renditions
from .submitter import submit_job

logger = Logger(service="job-submitter", child=True)


class BatchOrchestrator:
    """Fans out job submissions for a batch of source objects.

    Args:
        settings: Validated configuration; the orchestrator never reads the
            environment itself

    Raises:
        ConfigurationError: If the configured rendition ladder is unusable
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        try:
            self.renditions = resolve_renditions(settings.renditions)
        except ValueError as e:
            raise ConfigurationError(str(e), details={"field": "renditions"}) from e

    @property
    def max_workers(self) -> int | None:
        """Configured concurrency cap, None for one worker per object."""
        return self.settings.max_concurrency

    def handle(self, references: Sequence[ObjectReference]) -> BatchReport:
        """Submit one job per reference and wait for all of them.

        Args:
            references: Objects from the trigger event, in event order

        Returns:
            BatchReport with one outcome per reference, in the same order
        """
        region = self.settings.region
        resolution = resolve_endpoint(region)

        if not resolution.ok:
            logger.error(
                "Aborting batch, MediaConvert endpoint unavailable",
                extra={
                    "region": region,
                    "error_code": resolution.error_code,
                    "record_count": len(references),
                },
            )
            return BatchReport(
                region=region,
                outcomes=[self._skipped(ref, resolution) for ref in references],
            )

        endpoint = resolution.endpoint
        if not references:
            return BatchReport(region=region, endpoint=endpoint)

        jobs = [
            build_job_settings(ref, self.settings.destination_bucket, self.renditions)
            for ref in references
        ]

        # Created before fan-out; client construction is not thread-safe.
        client = get_mediaconvert_client(endpoint, region)
        queue_arn = self.settings.mediaconvert_queue_arn or None

        workers = self.max_workers or len(references)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="create-job") as executor:
            futures = [
                executor.submit(
                    submit_job,
                    client,
                    ref,
                    job,
                    self.settings.mediaconvert_role_arn,
                    queue_arn,
                )
                for ref, job in zip(references, jobs)
            ]

        outcomes = [self._collect(ref, future) for ref, future in zip(references, futures)]
        report = BatchReport(region=region, endpoint=endpoint, outcomes=outcomes)

        logger.info(
            "Batch submitted",
            extra={
                "endpoint": endpoint,
                "record_count": len(references),
                "submitted": report.submitted_count,
                "failed": report.failed_count,
            },
        )
        return report

    @staticmethod
    def _collect(
        ref: ObjectReference,
        future: "Future[SubmissionOutcome]",
    ) -> SubmissionOutcome:
        """Turn a finished future into an outcome, whatever it raised."""
        try:
            return future.result()
        except Exception as e:
            logger.exception(
                "Unexpected error submitting job",
                extra={"source_uri": ref.source_uri},
            )
            return SubmissionOutcome(
                source=ref,
                status=SubmissionStatus.FAILED,
                error_code="UNEXPECTED_ERROR",
                error_message=str(e),
            )

    @staticmethod
    def _skipped(ref: ObjectReference, resolution: EndpointResolution) -> SubmissionOutcome:
        return SubmissionOutcome(
            source=ref,
            status=SubmissionStatus.SKIPPED,
            error_code=resolution.error_code,
            error_message=resolution.error_message,
        )
