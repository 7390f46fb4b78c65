"""
Error taxonomy and error reporting utilities for the proxy handlers.

Each failure the pipeline can produce is a BaseServiceError subclass with a
stable error code. Handlers convert them into the failure envelope and use
get_http_status_code to pick the HTTP status.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field

from public_data_proxy.handlers.utils.observability import logger, metrics, tracer

MALFORMED_RESPONSE_MESSAGE = 'API 응답 형식이 올바르지 않습니다'


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    CONFIGURATION = "CONFIGURATION"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    TIMEOUT = "TIMEOUT"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    operation: str = Field(description="Operation being performed")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.INFRASTRUCTURE,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.error_id = str(uuid.uuid4())

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "error_message": self.message,
            "severity": self.severity.value,
            "category": self.category.value,
            "context": self.context.model_dump(mode="json") if self.context else None,
        }


class ValidationError(BaseServiceError):
    """Raised when the inbound request is rejected before any upstream call."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
        )


class PageSizeLimitError(ValidationError):
    """Raised when the requested page is larger than the configured maximum."""

    def __init__(self, requested_size: int, max_page_size: int, context: Optional[ErrorContext] = None):
        super().__init__(
            message=(
                f"요청 범위가 최대 허용 건수를 초과했습니다: "
                f"요청 {requested_size}건, 최대 {max_page_size}건"
            ),
            context=context,
        )
        self.error_code = "PAGE_SIZE_LIMIT_EXCEEDED"
        self.requested_size = requested_size
        self.max_page_size = max_page_size


class ConfigurationError(BaseServiceError):
    """Raised when the process environment cannot be parsed into settings."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            severity=ErrorSeverity.CRITICAL,
            category=ErrorCategory.CONFIGURATION,
        )


class ExternalServiceError(BaseServiceError):
    """Raised when the upstream open-data API call fails."""

    def __init__(
        self,
        message: str,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
        category: ErrorCategory = ErrorCategory.EXTERNAL_SERVICE,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=ErrorSeverity.HIGH,
            category=category,
            context=context,
        )


class UpstreamHttpError(ExternalServiceError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=f"API 호출 실패: {status_code} {reason}".rstrip(),
            error_code="UPSTREAM_HTTP_ERROR",
            context=context,
        )
        self.status_code = status_code
        self.reason = reason


class UpstreamConnectionError(ExternalServiceError):
    """Upstream could not be reached at all."""

    def __init__(self, reason: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=f"API 호출 실패: {reason}",
            error_code="UPSTREAM_CONNECTION_ERROR",
            context=context,
        )


class UpstreamTimeoutError(ExternalServiceError):
    """Upstream did not answer within the configured timeout."""

    def __init__(self, timeout_seconds: float, context: Optional[ErrorContext] = None):
        super().__init__(
            message=f"API 호출 시간 초과: {timeout_seconds:g}초",
            error_code="UPSTREAM_TIMEOUT",
            category=ErrorCategory.TIMEOUT,
            context=context,
        )
        self.timeout_seconds = timeout_seconds


class MalformedUpstreamResponse(ExternalServiceError):
    """Upstream body decoded, but the expected root key or row list is absent."""

    def __init__(self, body_length: int, reason: str = "", context: Optional[ErrorContext] = None):
        super().__init__(
            message=MALFORMED_RESPONSE_MESSAGE,
            error_code="MALFORMED_UPSTREAM_RESPONSE",
            context=context,
        )
        self.body_length = body_length
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"body_length": self.body_length, "reason": self.reason})
        return data


def create_error_context(request_id: str, operation: str, **additional_data: Any) -> ErrorContext:
    """Create an error context for consistent error handling."""
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        additional_data=additional_data,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""

    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)
    tracer.put_metadata("error_details", error.to_dict())

    log = logger.warning if error.severity == ErrorSeverity.LOW else logger.error
    log("Service error occurred", extra=error.to_dict())


def get_http_status_code(error: BaseServiceError) -> int:
    """Get the HTTP status code for an error: 400 for rejected requests, 500 otherwise."""
    if isinstance(error, ValidationError):
        return 400
    return 500
