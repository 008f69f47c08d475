"""
Centralized error handling for the Golf Genius client.
Provides the retry decorator used by the transport and a decorator that
attaches call context to library errors without changing their type.
"""

import asyncio
import logging
import functools
from typing import Any, Callable, Dict, Optional, TypeVar, Awaitable
from datetime import datetime, timezone

from .exceptions import GolfGeniusError, ErrorContext, APIConnectionError

logger = logging.getLogger(__name__)

AF = TypeVar('AF', bound=Callable[..., Awaitable[Any]])


class ErrorHandler:
    """
    Retry logic with exponential backoff, plus failure bookkeeping.
    """

    def __init__(self, default_retries: int = 3, default_delay: float = 0.5):
        self.default_retries = default_retries
        self.default_delay = default_delay
        self.retry_history: Dict[str, Dict[str, Any]] = {}

    def with_retry(
        self,
        max_retries: Optional[int] = None,
        delay: Optional[float] = None,
        backoff_factor: float = 2.0,
        retryable_exceptions: Optional[tuple] = None
    ):
        """
        Decorator for automatic retry with exponential backoff.

        Args:
            max_retries: Retries after the first attempt (0 disables retrying)
            delay: Initial delay between retries
            backoff_factor: Multiplier applied to the delay after each retry
            retryable_exceptions: Tuple of exception types to retry on
        """
        if retryable_exceptions is None:
            retryable_exceptions = (APIConnectionError,)

        def decorator(func: AF) -> AF:
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                retries = self.default_retries if max_retries is None else max_retries
                current_delay = self.default_delay if delay is None else delay
                operation_id = f"{func.__module__}.{func.__qualname__}"

                for attempt in range(retries + 1):
                    try:
                        result = await func(*args, **kwargs)

                        if attempt > 0:
                            logger.info(
                                f"Operation {operation_id} succeeded after {attempt} retries"
                            )

                        return result

                    except retryable_exceptions as e:
                        if attempt >= retries:
                            self._record_failure(operation_id, e, attempt + 1)
                            logger.error(
                                f"Operation {operation_id} failed after {attempt + 1} attempts: {e}"
                            )
                            raise

                        logger.warning(
                            f"Operation {operation_id} failed (attempt {attempt + 1}/{retries + 1}): {e}. "
                            f"Retrying in {current_delay}s..."
                        )

                        await asyncio.sleep(current_delay)
                        current_delay *= backoff_factor

            return wrapper
        return decorator

    def _record_failure(self, operation_id: str, error: Exception, attempts: int):
        """Record operation failure for monitoring."""
        history = self.retry_history.setdefault(operation_id, {
            'failures': 0,
            'last_failure': None,
            'last_error': None,
            'total_attempts': 0
        })
        history['failures'] += 1
        history['last_failure'] = datetime.now(timezone.utc)
        history['last_error'] = type(error).__name__
        history['total_attempts'] += attempts

    def get_failure_stats(self) -> Dict[str, Dict[str, Any]]:
        """Get failure statistics for monitoring."""
        return self.retry_history.copy()

    def reset_stats(self):
        """Reset failure statistics."""
        self.retry_history.clear()


# Global error handler instance
error_handler = ErrorHandler()


def with_error_context(operation: str):
    """
    Decorator that fills in ``ErrorContext`` on library errors raised by a
    resource operation. The exception itself is re-raised unchanged.
    """
    def decorator(func: AF) -> AF:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except GolfGeniusError as e:
                if e.context is None:
                    owner = args[0] if args else None
                    e.context = ErrorContext(
                        operation=operation,
                        endpoint=getattr(owner, "resource_path", None),
                        parameters=dict(kwargs)
                    )
                raise

        return wrapper

    return decorator
