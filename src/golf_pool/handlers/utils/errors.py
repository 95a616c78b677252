"""
Service errors and their HTTP rendering.

Every failure the pool reports to a caller is a BaseServiceError subclass. Each
class carries its own error code, HTTP status, severity and category, so the
logic and data access layers only choose which error to raise; turning it into
a JSON body, a log line and a metric happens once, in ``handle_service_errors``.

Error bodies look like::

    {"error": {"code": "UNAUTHORIZED", "message": "Not logged in", "error_id": "..."}}
"""

import functools
import json
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from golf_pool.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """How loudly an error is logged."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Where an error originates; one error metric is emitted per category."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    EXTERNAL_SERVICE = "EXTERNAL_SERVICE"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    SECURITY = "SECURITY"


class ErrorContext(BaseModel):
    """Request details attached to an error for logging, never returned to callers."""

    request_id: str = Field(description="API Gateway request id")
    operation: str = Field(description="Route operation, e.g. submit_score")
    user_id: Optional[str] = Field(default=None, description="Identity account, once known")
    resource_id: Optional[str] = Field(default=None, description="Week or player concerned")
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Root of the pool's error hierarchy."""

    error_code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    severity = ErrorSeverity.MEDIUM
    category = ErrorCategory.BUSINESS_LOGIC

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.user_message = user_message or message
        self.error_id = str(uuid.uuid4())

    def log_fields(self) -> Dict[str, Any]:
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "error_severity": self.severity.value,
            "error_category": self.category.value,
            "error_message": self.message,
            "context": self.context.model_dump(mode="json") if self.context else None,
        }


class UnexpectedError(BaseServiceError):
    """Wraps an exception nothing else handled; its detail stays in the logs."""

    severity = ErrorSeverity.CRITICAL
    category = ErrorCategory.INFRASTRUCTURE

    def __init__(self, message: str):
        super().__init__(message, user_message="An unexpected error occurred")


class ValidationError(BaseServiceError):
    """The request body is not JSON or does not fit the request model."""

    error_code = "VALIDATION_ERROR"
    status_code = 400
    severity = ErrorSeverity.LOW
    category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(message, context=context)
        self.field_errors = field_errors or []

    @classmethod
    def from_pydantic(cls, error: PydanticValidationError) -> "ValidationError":
        field_errors = [
            {"field": ".".join(str(part) for part in detail["loc"]), "message": detail["msg"]}
            for detail in error.errors()
        ]
        return cls("Request validation failed", field_errors=field_errors)


class NoScheduledWeeksError(BaseServiceError):
    """An operation on the current week ran while no week is scheduled."""

    error_code = "NO_SCHEDULED_WEEKS"
    status_code = 400
    severity = ErrorSeverity.LOW

    def __init__(self, context: Optional[ErrorContext] = None):
        super().__init__("No scheduled weeks exist", context=context)


class AuthenticationError(BaseServiceError):
    """Missing or wrong admin token, or no valid member session."""

    error_code = "UNAUTHORIZED"
    status_code = 401
    severity = ErrorSeverity.LOW
    category = ErrorCategory.SECURITY

    def __init__(self, message: str = "Unauthorized", context: Optional[ErrorContext] = None):
        super().__init__(message, context=context)


class PlayerNotLinkedError(BaseServiceError):
    """The caller is logged in but has not created a player profile."""

    error_code = "PLAYER_NOT_LINKED"
    status_code = 403
    severity = ErrorSeverity.LOW
    category = ErrorCategory.SECURITY

    def __init__(self, user_id: str, context: Optional[ErrorContext] = None):
        super().__init__(
            f"No player linked to user '{user_id}'",
            context=context,
            user_message="No player linked to this login yet. Go to Sign Up and create your profile.",
        )
        self.user_id = user_id


class ResourceNotFoundError(BaseServiceError):
    """An explicitly requested week or player does not exist."""

    error_code = "RESOURCE_NOT_FOUND"
    status_code = 404
    severity = ErrorSeverity.LOW

    def __init__(self, resource_type: str, resource_id: str, context: Optional[ErrorContext] = None):
        super().__init__(
            f"{resource_type} '{resource_id}' does not exist",
            context=context,
            user_message=f"{resource_type} not found",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UpstreamServiceError(BaseServiceError):
    """The data store or identity service failed; its status is passed through."""

    error_code = "UPSTREAM_ERROR"
    severity = ErrorSeverity.HIGH
    category = ErrorCategory.EXTERNAL_SERVICE

    def __init__(
        self,
        service_name: str,
        status_code: int,
        body: str,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(body or f"{service_name} answered {status_code}", context=context)
        self.service_name = service_name
        # Anything that is not an error status (or a transport failure) surfaces as a bad gateway
        self.status_code = status_code if status_code >= 400 else 502
        self.body = body


class ConfigurationError(BaseServiceError):
    """The function's environment is missing or invalid."""

    error_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL
    category = ErrorCategory.INFRASTRUCTURE


def create_error_context(
    request_id: str,
    operation: str,
    user_id: Optional[str] = None,
    resource_id: Optional[str] = None,
    **details: Any,
) -> ErrorContext:
    return ErrorContext(
        request_id=request_id,
        operation=operation,
        user_id=user_id,
        resource_id=resource_id,
        details=details,
    )


def log_error_metrics(error: BaseServiceError) -> None:
    """Record one error: a log line at its severity, a trace annotation and two counters."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"{error.error_code.title().replace('_', '')}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)

    if error.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
        logger.error("Request failed", extra=error.log_fields())
    else:
        logger.warning("Request rejected", extra=error.log_fields())


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "code": error.error_code,
        "message": error.user_message,
        "error_id": error.error_id,
    }
    if isinstance(error, ValidationError) and error.field_errors:
        body["field_errors"] = error.field_errors
    return {"error": body}


def get_http_status_code(error: BaseServiceError) -> int:
    return error.status_code


def create_api_response(status_code: int, body: Any) -> Response:
    """JSON response; the resolver adds CORS headers."""
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(body, default=str),
    )


def handle_service_errors(func):
    """
    Turn exceptions raised by a route into JSON error responses.

    BaseServiceError subclasses keep their own status. Request models failing
    validation become a 400 with per-field messages. Anything else is logged
    with its traceback and answered with a generic 500.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseServiceError as e:
            error = e
        except PydanticValidationError as e:
            error = ValidationError.from_pydantic(e)
        except Exception as e:
            logger.exception("Unhandled error in route", extra={"route_function": func.__name__})
            error = UnexpectedError(str(e))

        log_error_metrics(error)
        return create_api_response(get_http_status_code(error), format_error_response(error))

    return wrapper
