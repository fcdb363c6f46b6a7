"""
Custom exception classes and structured error responses.

This module provides:
- Structured error response format
- Specific exception classes for different error types
- Error codes for programmatic error handling
"""

from datetime import datetime, timezone

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorCode:
    """Error codes for programmatic error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "ERR_1000"
    VALIDATION_ERROR = "ERR_1001"

    # Image errors (4xxx)
    IMAGE_INVALID_URL = "ERR_4001"
    IMAGE_PROXY_FAILED = "ERR_4002"

    # Rendering errors (5xxx)
    DOCUMENT_GENERATION_FAILED = "ERR_5001"


class ErrorDetail(BaseModel):
    """Structured error detail for API responses."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response for API."""

    error: str  # Error class name
    code: str  # Error code for programmatic handling
    message: str  # Human-readable message
    details: list[ErrorDetail] | None = None
    timestamp: str  # ISO 8601 timestamp

    @classmethod
    def create(
        cls,
        error: str,
        code: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> "ErrorResponse":
        """Create an error response stamped with the current UTC time."""
        return cls(
            error=error,
            code=code,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )


class JobRendererException(HTTPException):
    """Base exception for all job renderer HTTP errors."""

    error_code: str = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        error_code: str | None = None,
        details: list[ErrorDetail] | None = None,
    ):
        self.error_code = error_code or self.__class__.error_code
        error_response = ErrorResponse.create(
            error=self.__class__.__name__, code=self.error_code, message=detail, details=details
        )
        super().__init__(status_code=status_code, detail=error_response.model_dump())


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(JobRendererException):
    """Raised when request validation fails."""

    error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, details: list[ErrorDetail] | None = None):
        super().__init__(
            detail=message, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, details=details
        )


class InvalidImageUrlError(ValidationError):
    """Raised when an image URL cannot be proxied."""

    error_code = ErrorCode.IMAGE_INVALID_URL

    def __init__(self, url: str, reason: str = "Only http and https URLs are allowed"):
        super().__init__(
            message=f"Unsupported image URL: {url}",
            details=[ErrorDetail(code=self.error_code, message=reason, field="url")],
        )


# =============================================================================
# Operation Errors
# =============================================================================


class ImageProxyError(JobRendererException):
    """Raised when the remote image cannot be fetched or is not an image."""

    error_code = ErrorCode.IMAGE_PROXY_FAILED

    def __init__(self, detail: str):
        super().__init__(
            detail=f"Image proxy failed: {detail}", status_code=status.HTTP_502_BAD_GATEWAY
        )


class DocumentGenerationError(JobRendererException):
    """Raised when the PDF pipeline fails; the cause is logged, not exposed."""

    error_code = ErrorCode.DOCUMENT_GENERATION_FAILED

    def __init__(self):
        super().__init__(
            detail="Could not generate the job description document. Please try again.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
