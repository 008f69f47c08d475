"""
Core package for the Golf Genius client.
Contains exceptions, error handling and common utilities.
"""

from .exceptions import *
from .error_handler import ErrorHandler, error_handler, with_error_context
from .utils import *

__all__ = [
    # Base exceptions
    "GolfGeniusError",
    "ErrorContext",
    "NotFoundError",
    "ConfigurationError",

    # API exceptions
    "APIException",
    "APIConnectionError",
    "APITimeoutError",
    "APIRateLimitError",
    "APIAuthenticationError",
    "APINotFoundError",
    "APIValidationError",
    "APIServerError",
    "MalformedResponseError",

    # Domain exceptions
    "DomainException",
    "ResourceNotFoundError",
    "InvalidArgumentError",
    "ArityError",

    # Error handler
    "ErrorHandler",
    "error_handler",
    "with_error_context",

    # Utilities
    "LoggerFactory",
    "APIResponseProcessor",
    "RequestParams",
]
