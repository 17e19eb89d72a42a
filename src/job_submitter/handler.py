"""Lambda handler that starts MediaConvert jobs for uploaded videos.

This Lambda is triggered by S3 ObjectCreated events on the source bucket.
Every object in the event gets its own MediaConvert job writing HLS output
to the destination bucket.

Flow:
1. Load and validate settings from the environment
2. Convert S3 event records into object references
3. Resolve the MediaConvert endpoint and submit all jobs concurrently
4. Return a per-object report

The invocation always completes: failures are logged and reported in the
response body, never raised to the Lambda runtime, so S3 does not redeliver
a batch that was partially submitted.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import S3Event, event_source
from aws_lambda_powertools.utilities.typing import LambdaContext

from ..shared.config import get_settings
from ..shared.exceptions import ConfigurationError
from ..shared.models import BatchReport, ObjectReference
from .orchestrator import BatchOrchestrator

logger = Logger(service="job-submitter")
tracer = Tracer(service="job-submitter")
metrics = Metrics(service="job-submitter", namespace="VodTranscoding")


@logger.inject_lambda_context(log_event=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
@event_source(data_class=S3Event)
def handler(event: S3Event, context: LambdaContext) -> dict[str, Any]:
    """Submit one MediaConvert job per object in the S3 event.

    Args:
        event: S3 ObjectCreated event
        context: Lambda context

    Returns:
        Response with the batch report (statusCode 200), or the error that
        stopped the batch (statusCode 500)

    Output structure:
        {
            "statusCode": 200,
            "body": {
                "region": "us-east-1",
                "endpoint": "https://abc123.mediaconvert.us-east-1.amazonaws.com",
                "submitted": 1,
                "failed": 0,
                "skipped": 0,
                "outcomes": [...]
            }
        }
    """
    try:
        settings = get_settings()
        logger.setLevel(settings.log_level)

        references = object_references_from_event(event)
        logger.info(
            "Processing trigger batch",
            extra={
                "record_count": len(references),
                "destination_bucket": settings.destination_bucket,
                "region": settings.region,
            },
        )

        report = _run_batch(BatchOrchestrator(settings), references)

    except ConfigurationError as e:
        logger.error("Invalid configuration", extra={"error": e.to_dict()})
        metrics.add_metric(name="ConfigurationErrors", unit=MetricUnit.Count, value=1)
        return {"statusCode": 500, "body": e.to_dict()}

    except Exception as e:
        logger.exception("Unexpected error handling trigger batch")
        return {
            "statusCode": 500,
            "body": {
                "error_code": "UNEXPECTED_ERROR",
                "error_message": str(e),
                "details": {},
            },
        }

    _emit_batch_metrics(report)
    return {"statusCode": 200, "body": report.to_response()}


@tracer.capture_method
def _run_batch(orchestrator: BatchOrchestrator, references: list[ObjectReference]) -> BatchReport:
    return orchestrator.handle(references)


def object_references_from_event(event: S3Event) -> list[ObjectReference]:
    """Extract source object references from an S3 event, in record order."""
    references = []
    for record in event.records:
        s3_object = record.s3.get_object
        references.append(
            ObjectReference(
                bucket=record.s3.bucket.name,
                key=s3_object.key,
                etag=s3_object.get("eTag") or None,
            )
        )
    return references


def _emit_batch_metrics(report: BatchReport) -> None:
    metrics.add_metric(name="JobsSubmitted", unit=MetricUnit.Count, value=report.submitted_count)
    metrics.add_metric(name="JobsFailed", unit=MetricUnit.Count, value=report.failed_count)
    metrics.add_metric(name="JobsSkipped", unit=MetricUnit.Count, value=report.skipped_count)
    if report.endpoint is None:
        metrics.add_metric(name="EndpointResolutionErrors", unit=MetricUnit.Count, value=1)

    for outcome in report.outcomes:
        if not outcome.is_success:
            logger.warning(
                "Object not transcoded",
                extra={
                    "source_uri": outcome.source.source_uri,
                    "status": outcome.status.value,
                    "error_code": outcome.error_code,
                    "error_message": outcome.error_message,
                },
            )
