"""
Exception hierarchy for the Golf Genius client.
Separates "definitely absent" (NotFoundError) from "indeterminate" failures
(malformed responses and transport errors) so callers can tell them apart.
"""

from typing import Any, Dict, Optional, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone


REDACTED = "[REDACTED]"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    endpoint: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=_utcnow)
    request_id: Optional[str] = None

    def __post_init__(self):
        if self.parameters and "api_key" in self.parameters:
            self.parameters = {**self.parameters, "api_key": REDACTED}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error context to dictionary."""
        return {
            'operation': self.operation,
            'endpoint': self.endpoint,
            'parameters': self.parameters,
            'timestamp': self.timestamp.isoformat(),
            'request_id': self.request_id
        }


class GolfGeniusError(Exception):
    """
    Base exception class for all Golf Genius client errors.
    Carries context and an error code for logging and serialization.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        error_code: Optional[str] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.original_error = original_error
        self.error_code = error_code
        self.recoverable = recoverable
        self.timestamp = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'recoverable': self.recoverable,
            'timestamp': self.timestamp.isoformat(),
            'context': self.context.to_dict() if self.context else None,
            'original_error': str(self.original_error) if self.original_error else None
        }

    def __str__(self) -> str:
        base_msg = self.message
        if self.context and self.context.endpoint:
            base_msg += f" (Endpoint: {self.context.endpoint})"
        if self.error_code:
            base_msg += f" [Code: {self.error_code}]"
        return base_msg


class NotFoundError(GolfGeniusError):
    """
    Marker base for "definitely absent" outcomes.
    Raised either by the API (HTTP 404) or by a list scan that found no match.
    """


# =============================================================================
# Configuration and Argument Exceptions
# =============================================================================

class ConfigurationError(GolfGeniusError):
    """Raised when configuration is invalid or missing (e.g. no API key)."""

    def __init__(self, setting: str, message: str, context: Optional[ErrorContext] = None):
        full_message = f"Configuration error for '{setting}': {message}"
        super().__init__(
            message=full_message,
            context=context,
            error_code="CONFIG_ERROR",
            recoverable=False
        )
        self.setting = setting


# =============================================================================
# API-Related Exceptions
# =============================================================================

class APIException(GolfGeniusError):
    """Base class for all API-related errors. Also raised for unmapped HTTP statuses."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        recoverable: bool = False,
        error_code: str = "API_ERROR"
    ):
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code=error_code,
            recoverable=recoverable
        )
        self.status_code = status_code
        self.response_data = response_data
        self.headers = headers or {}

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'status_code': self.status_code,
            'response_data': self.response_data
        })
        return base_dict

    def __str__(self) -> str:
        prefix = f"(Status {self.status_code}) " if self.status_code is not None else ""
        return prefix + super().__str__()


class APIConnectionError(APIException):
    """Raised when unable to reach the API."""

    def __init__(self, url: str, context: Optional[ErrorContext] = None, original_error: Optional[Exception] = None):
        message = f"Failed to connect to API endpoint: {url}"
        if original_error is not None:
            message += f" ({original_error})"
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            recoverable=True,
            error_code="API_CONNECTION_ERROR"
        )
        self.url = url


class APITimeoutError(APIConnectionError):
    """Raised when an API request times out."""

    def __init__(self, url: str, timeout: Optional[float] = None, context: Optional[ErrorContext] = None,
                 original_error: Optional[Exception] = None):
        super().__init__(url=url, context=context, original_error=original_error)
        self.message = f"API request timed out after {timeout} seconds: {url}"
        self.timeout = timeout
        self.error_code = "API_TIMEOUT_ERROR"


class APIRateLimitError(APIException):
    """Raised when the API rate limit is exceeded (HTTP 429)."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        retry_after: Optional[int] = None,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None
    ):
        if retry_after:
            message += f". Retry after {retry_after} seconds"
        super().__init__(
            message=message,
            status_code=429,
            response_data=response_data,
            headers=headers,
            context=context,
            recoverable=True,
            error_code="API_RATE_LIMIT_ERROR"
        )
        self.retry_after = retry_after


class APIAuthenticationError(APIException):
    """Raised when API authentication fails (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "API authentication failed. Check your API key.",
        status_code: int = 401,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            response_data=response_data,
            headers=headers,
            context=context,
            recoverable=False,
            error_code="API_AUTH_ERROR"
        )


class APINotFoundError(APIException, NotFoundError):
    """Raised when the API reports a missing endpoint or resource (HTTP 404)."""

    def __init__(
        self,
        message: str,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(
            message=message,
            status_code=404,
            response_data=response_data,
            headers=headers,
            context=context,
            recoverable=False,
            error_code="API_NOT_FOUND_ERROR"
        )


class APIValidationError(APIException):
    """Raised when the API rejects request parameters (HTTP 422)."""

    def __init__(
        self,
        message: str,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(
            message=message,
            status_code=422,
            response_data=response_data,
            headers=headers,
            context=context,
            recoverable=False,
            error_code="API_VALIDATION_ERROR"
        )


class APIServerError(APIException):
    """Raised when the API server returns a 5xx error."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(
            message=message,
            status_code=status_code,
            response_data=response_data,
            headers=headers,
            context=context,
            recoverable=True,
            error_code="API_SERVER_ERROR"
        )


class MalformedResponseError(APIException):
    """Raised when a response body is not shaped as a list or an object."""

    def __init__(
        self,
        expected_format: str,
        actual_content: Any = None,
        context: Optional[ErrorContext] = None
    ):
        message = (
            f"Invalid API response format. Expected: {expected_format}, "
            f"got: {type(actual_content).__name__}"
        )
        super().__init__(
            message=message,
            response_data=actual_content,
            context=context,
            recoverable=False,
            error_code="API_RESPONSE_ERROR"
        )
        self.expected_format = expected_format
        self.actual_content = actual_content


# =============================================================================
# Domain-Level Exceptions
# =============================================================================

class DomainException(GolfGeniusError):
    """Base class for errors raised by the resource access layer itself."""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None,
        error_code: str = "DOMAIN_ERROR",
        recoverable: bool = False
    ):
        super().__init__(
            message=message,
            context=context,
            original_error=original_error,
            error_code=error_code,
            recoverable=recoverable
        )


class ResourceNotFoundError(DomainException, NotFoundError):
    """Raised when a list scan finishes without a matching record."""

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        fields: Optional[Sequence[str]] = None,
        context: Optional[ErrorContext] = None
    ):
        message = f"Resource not found: {resource}"
        if identifier is not None:
            message += f" {identifier}"
        if fields:
            message += f" (matched on {', '.join(fields)})"
        super().__init__(
            message=message,
            context=context,
            error_code="RESOURCE_NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier
        self.fields = tuple(fields or ())


class InvalidArgumentError(DomainException, ValueError):
    """Raised when a call is given arguments it cannot act on."""

    def __init__(self, argument: str, reason: str, context: Optional[ErrorContext] = None):
        message = f"Invalid argument '{argument}': {reason}"
        super().__init__(
            message=message,
            context=context,
            error_code="INVALID_ARGUMENT",
            recoverable=True
        )
        self.argument = argument
        self.reason = reason


class ArityError(InvalidArgumentError):
    """Raised when a nested resource receives the wrong number of parent ids."""

    def __init__(self, resource: str, expected: Sequence[str], received: int,
                 context: Optional[ErrorContext] = None):
        count = len(expected)
        noun = "argument" if count == 1 else "arguments"
        super().__init__(
            argument=resource,
            reason=f"{resource} requires {count} {noun} ({', '.join(expected)}), got {received}",
            context=context
        )
        self.error_code = "ARITY_ERROR"
        self.expected = tuple(expected)
        self.received = received
