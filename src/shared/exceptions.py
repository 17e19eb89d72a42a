"""Custom exception hierarchy for the transcode trigger.

All pipeline-specific exceptions inherit from TranscodingPipelineError,
enabling consistent error handling and structured log output.

Exception hierarchy:
    TranscodingPipelineError (base)
    ├── ConfigurationError
    ├── EndpointResolutionError
    └── JobSubmissionError
"""

from typing import Any

from pydantic import ValidationError


class TranscodingPipelineError(Exception):
    """Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for metrics/filtering
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize pipeline error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (e.g., 'CONFIGURATION_ERROR')
            details: Additional context for debugging
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with error_code, error_message, and details.
            Note: Uses 'error_message' instead of 'message' to avoid conflicts
            with Python's logging module which reserves 'message' internally.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class ConfigurationError(TranscodingPipelineError):
    """Raised when the function's environment configuration is missing or invalid.

    This covers:
    - Missing destination bucket, MediaConvert role or region
    - Malformed ARNs or region codes
    - Unparseable rendition ladder JSON
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", details)

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "ConfigurationError":
        """Summarize a pydantic ValidationError into a single-line error."""
        problems = {
            ".".join(str(part) for part in err["loc"]) or "settings": err["msg"]
            for err in error.errors()
        }
        fields = ", ".join(sorted(problems))
        return cls(f"Invalid configuration: {fields}", details={"fields": problems})


class EndpointResolutionError(TranscodingPipelineError):
    """Raised when the regional MediaConvert endpoint cannot be determined.

    Only raised on request via EndpointResolution.raise_for_error();
    the resolver itself reports failures as a result value.
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ENDPOINT_RESOLUTION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class JobSubmissionError(TranscodingPipelineError):
    """Raised when MediaConvert job submission fails.

    This covers:
    - API errors from MediaConvert
    - Invalid job settings
    - IAM permission errors
    """

    def __init__(
        self,
        message: str,
        error_code: str = "JOB_SUBMISSION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)
