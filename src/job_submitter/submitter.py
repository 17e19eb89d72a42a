"""MediaConvert job submission.

Submits one job per call and reports the result as a SubmissionOutcome.
The call returns once MediaConvert has accepted the job; transcoding runs
asynchronously on the service side and is not polled.

Idempotency:
    When the triggering event carries an ETag, the request includes a
    ClientRequestToken derived from the object and the job settings. A
    redelivered S3 event then maps onto the job already created instead of
    starting a second one, while a changed ladder still produces a new job.
    MediaConvert only honours a repeated token for about one minute after
    the first successful request; later redeliveries create a new job.
"""

import hashlib
import json
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.models import ObjectReference, SubmissionOutcome, SubmissionStatus

logger = Logger(service="job-submitter", child=True)


def generate_client_request_token(
    source: ObjectReference,
    job_settings: dict[str, Any],
) -> str | None:
    """Generate a deterministic CreateJob token for an object.

    Components:
    - bucket and key: which object
    - etag: which version of its content
    - job settings: which encoding profile

    Returns:
        64-character hex string (SHA-256 hash), or None when the object has
        no ETag and therefore no stable content identity
    """
    if not source.etag:
        return None

    key_components = [
        source.bucket,
        source.key,
        source.etag,
        json.dumps(job_settings, sort_keys=True),
    ]
    combined = "|".join(key_components)
    return hashlib.sha256(combined.encode()).hexdigest()


def submit_job(
    client: Any,
    source: ObjectReference,
    job_settings: dict[str, Any],
    role_arn: str,
    queue_arn: str | None = None,
) -> SubmissionOutcome:
    """Create a MediaConvert job for one source object.

    Args:
        client: MediaConvert client bound to the resolved endpoint
        source: Object the job transcodes
        job_settings: Settings from build_job_settings
        role_arn: IAM role MediaConvert assumes for S3 access
        queue_arn: Queue to submit to (account default when None)

    Returns:
        SUBMITTED outcome with the job ID, or FAILED with the AWS error
    """
    request: dict[str, Any] = {
        "Role": role_arn,
        "Settings": job_settings,
        "UserMetadata": {
            "source_bucket": source.bucket,
            "source_key": source.key,
        },
    }
    if queue_arn:
        request["Queue"] = queue_arn

    token = generate_client_request_token(source, job_settings)
    if token:
        request["ClientRequestToken"] = token

    try:
        response = client.create_job(**request)
    except ClientError as e:
        error = e.response.get("Error", {})
        logger.error(
            "CreateJob rejected",
            extra={
                "source_uri": source.source_uri,
                "error_code": error.get("Code"),
                "error": str(e),
            },
        )
        return SubmissionOutcome(
            source=source,
            status=SubmissionStatus.FAILED,
            error_code=error.get("Code") or "CLIENT_ERROR",
            error_message=error.get("Message") or str(e),
        )
    except BotoCoreError as e:
        logger.error(
            "CreateJob transport error",
            extra={"source_uri": source.source_uri, "error": str(e)},
        )
        return SubmissionOutcome(
            source=source,
            status=SubmissionStatus.FAILED,
            error_code="TRANSPORT_ERROR",
            error_message=str(e),
        )

    job_id = response["Job"]["Id"]
    logger.info(
        "Job submitted",
        extra={"source_uri": source.source_uri, "job_id": job_id},
    )
    return SubmissionOutcome(
        source=source,
        status=SubmissionStatus.SUBMITTED,
        job_id=job_id,
    )
