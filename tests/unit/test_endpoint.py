"""Unit tests for MediaConvert endpoint discovery."""

from unittest.mock import MagicMock, patch

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.stub import Stubber

from src.job_submitter.endpoint import resolve_endpoint
from src.shared.aws_clients import available_regions
from src.shared.exceptions import EndpointResolutionError

ENDPOINT_URL = "https://abc123.mediaconvert.us-east-1.amazonaws.com"


@pytest.fixture
def control_plane():
    """Real MediaConvert client with a Stubber attached."""
    client = boto3.client("mediaconvert", region_name="us-east-1")
    with Stubber(client) as stubber:
        with patch(
            "src.job_submitter.endpoint.get_control_plane_client",
            return_value=client,
        ) as factory:
            yield stubber, factory


class TestResolveEndpoint:
    """Tests for resolve_endpoint."""

    def test_returns_first_endpoint(self, control_plane):
        """Test the first URL from DescribeEndpoints is used."""
        stubber, factory = control_plane
        stubber.add_response(
            "describe_endpoints",
            {
                "Endpoints": [
                    {"Url": ENDPOINT_URL},
                    {"Url": "https://other.mediaconvert.us-east-1.amazonaws.com"},
                ]
            },
            {},
        )

        result = resolve_endpoint("us-east-1")

        assert result.ok is True
        assert result.endpoint == ENDPOINT_URL
        assert result.region == "us-east-1"
        assert result.error_code is None
        factory.assert_called_once_with("us-east-1")
        stubber.assert_no_pending_responses()

    def test_empty_endpoint_list(self, control_plane):
        """Test an empty response is reported as NO_ENDPOINT."""
        stubber, _ = control_plane
        stubber.add_response("describe_endpoints", {"Endpoints": []}, {})

        result = resolve_endpoint("us-east-1")

        assert result.ok is False
        assert result.endpoint is None
        assert result.error_code == "NO_ENDPOINT"

    def test_service_error_is_returned_not_raised(self, control_plane):
        """Test AWS errors become a failed resolution."""
        stubber, _ = control_plane
        stubber.add_client_error(
            "describe_endpoints",
            service_error_code="ForbiddenException",
            service_message="User is not authorized",
            http_status_code=403,
        )

        result = resolve_endpoint("us-east-1")

        assert result.ok is False
        assert result.error_code == "ForbiddenException"
        assert result.error_message == "User is not authorized"

    def test_transport_error_is_returned_not_raised(self):
        """Test connection failures become a failed resolution."""
        client = MagicMock()
        client.describe_endpoints.side_effect = EndpointConnectionError(
            endpoint_url="https://mediaconvert.us-east-1.amazonaws.com"
        )

        with patch("src.job_submitter.endpoint.get_control_plane_client", return_value=client):
            result = resolve_endpoint("us-east-1")

        assert result.ok is False
        assert result.error_code == "TRANSPORT_ERROR"

    def test_unknown_region_fails_fast(self):
        """Test an unknown region never reaches the network."""
        with patch("src.job_submitter.endpoint.get_control_plane_client") as factory:
            result = resolve_endpoint("mars-north-9")

        assert result.ok is False
        assert result.error_code == "UNKNOWN_REGION"
        factory.assert_not_called()

    def test_raise_for_error(self):
        """Test a failed resolution can be turned into an exception."""
        with patch("src.job_submitter.endpoint.get_control_plane_client"):
            result = resolve_endpoint("mars-north-9")

        with pytest.raises(EndpointResolutionError) as exc_info:
            result.raise_for_error()

        assert exc_info.value.error_code == "UNKNOWN_REGION"
        assert exc_info.value.details == {"region": "mars-north-9"}


def test_available_regions_include_us_east_1():
    """Test botocore's region data lists MediaConvert in us-east-1."""
    assert "us-east-1" in available_regions()
