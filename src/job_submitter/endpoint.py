"""MediaConvert endpoint discovery.

MediaConvert accounts submit jobs to an account-specific regional endpoint,
which is looked up once per invocation with DescribeEndpoints. Failures are
returned as an EndpointResolution instead of being raised so the caller must
decide what to do with a batch that has nowhere to go.
"""

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.aws_clients import available_regions, get_control_plane_client
from ..shared.models import EndpointResolution

logger = Logger(service="job-submitter", child=True)


def resolve_endpoint(region: str) -> EndpointResolution:
    """Ask the regional control plane for the account's MediaConvert endpoint.

    Args:
        region: AWS region code (e.g. 'us-east-1')

    Returns:
        EndpointResolution holding either the first endpoint URL or an
        error code: UNKNOWN_REGION, NO_ENDPOINT, TRANSPORT_ERROR, or the
        AWS error code returned by the service
    """
    if region not in available_regions():
        logger.error("Unknown MediaConvert region", extra={"region": region})
        return EndpointResolution(
            region=region,
            error_code="UNKNOWN_REGION",
            error_message=f"MediaConvert is not available in region '{region}'",
        )

    try:
        client = get_control_plane_client(region)
        response = client.describe_endpoints()
    except ClientError as e:
        error = e.response.get("Error", {})
        logger.error(
            "DescribeEndpoints failed",
            extra={"region": region, "error_code": error.get("Code"), "error": str(e)},
        )
        return EndpointResolution(
            region=region,
            error_code=error.get("Code") or "CLIENT_ERROR",
            error_message=error.get("Message") or str(e),
        )
    except BotoCoreError as e:
        logger.error("DescribeEndpoints transport error", extra={"region": region, "error": str(e)})
        return EndpointResolution(
            region=region,
            error_code="TRANSPORT_ERROR",
            error_message=str(e),
        )

    endpoints = response.get("Endpoints") or []
    if not endpoints or not endpoints[0].get("Url"):
        logger.error("DescribeEndpoints returned no endpoints", extra={"region": region})
        return EndpointResolution(
            region=region,
            error_code="NO_ENDPOINT",
            error_message=f"No MediaConvert endpoint returned for region '{region}'",
        )

    url = endpoints[0]["Url"]
    logger.debug("Resolved MediaConvert endpoint", extra={"region": region, "endpoint": url})
    return EndpointResolution(region=region, endpoint=url)
