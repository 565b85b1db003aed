"""Custom exception classes for the diary mood pipeline."""

from typing import Any, Dict, Optional


class DiaryMoodException(Exception):
    """Base exception for all diary mood pipeline errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "status_code": self.status_code,
                "details": self.details,
            }
        }


class ChunkingError(DiaryMoodException):
    """Exception raised for text chunking errors."""

    def __init__(
        self,
        message: str = "Text chunking failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="CHUNKING_ERROR",
            details=details,
        )


class ConfigurationError(DiaryMoodException):
    """Exception raised when a client is built without usable configuration."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status_code=500,
            code="CONFIGURATION_ERROR",
            details=details,
        )


class ExternalServiceError(DiaryMoodException):
    """Exception raised when external service calls fail."""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        status_code: int = 502,
        code: str = "EXTERNAL_SERVICE_ERROR",
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_message = message or f"External service '{service}' unavailable"
        error_details = details or {}
        error_details["service"] = service
        if upstream_status is not None:
            error_details["upstream_status"] = upstream_status
        super().__init__(
            message=error_message,
            status_code=status_code,
            code=code,
            details=error_details,
        )


class AnalysisServiceError(ExternalServiceError):
    """Sentiment endpoint unreachable, non-success status, or malformed payload."""

    def __init__(
        self,
        message: str = "Sentiment analysis failed",
        status_code: int = 502,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            service="sentiment-analysis",
            message=message,
            status_code=status_code,
            code="ANALYSIS_SERVICE_ERROR",
            upstream_status=upstream_status,
            details=details,
        )


class SummaryServiceError(ExternalServiceError):
    """Summary endpoint unreachable, non-success status, or missing summary."""

    def __init__(
        self,
        message: str = "Summary generation failed",
        status_code: int = 502,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            service="text-summary",
            message=message,
            status_code=status_code,
            code="SUMMARY_SERVICE_ERROR",
            upstream_status=upstream_status,
            details=details,
        )
