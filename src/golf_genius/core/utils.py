"""
Core utilities for the Golf Genius client.
Logging setup, response envelope handling and request parameter normalization.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import MalformedResponseError

SCALAR_TYPES = (str, int, float, bool)


class LoggerFactory:
    """Centralized logger configuration."""

    _configured = False

    @classmethod
    def setup_logging(cls, level: Optional[str] = None, format_string: Optional[str] = None):
        """Attach a stream handler to the package logger once."""
        if cls._configured:
            return

        if level is None:
            from ..config.settings import get_settings
            level = get_settings().log_level

        if format_string is None:
            format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        package_logger = logging.getLogger("golf_genius")
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(format_string))
            package_logger.addHandler(handler)
        package_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        cls._configured = True

    @staticmethod
    def get_logger(name: str) -> logging.Logger:
        """Get a configured logger instance."""
        LoggerFactory.setup_logging()
        return logging.getLogger(name)


class APIResponseProcessor:
    """Envelope handling for list and object responses."""

    @staticmethod
    def extract_items(response_data: Any, response_key: Optional[str] = None) -> List[Any]:
        """
        Extract the result array from a response.

        Accepts a bare list, a dict holding the list under ``"data"`` or under
        ``response_key``, or a lone dict (treated as a single result).
        """
        if isinstance(response_data, list):
            return response_data
        if isinstance(response_data, dict):
            for key in ("data", response_key):
                if key and isinstance(response_data.get(key), list):
                    return response_data[key]
            return [response_data]
        raise MalformedResponseError("list or object", response_data)

    @staticmethod
    def unwrap_item(item: Any, item_key: Optional[str] = None) -> Any:
        """Unwrap ``{"season": {...}}`` style items to the inner object."""
        if item_key and isinstance(item, dict) and isinstance(item.get(item_key), dict):
            return item[item_key]
        return item

    @staticmethod
    def singularize_resource_key(plural: str) -> str:
        """Singular item key for a plural resource name (``directories`` -> ``directory``)."""
        if plural.endswith("ies"):
            return plural[:-3] + "y"
        if plural.endswith("s") and not plural.endswith("ss"):
            return plural[:-1]
        return plural

    @staticmethod
    def resource_key(path: str) -> str:
        """Last static segment of a resource path (``/events/{event_id}/rounds`` -> ``rounds``)."""
        segments = [s for s in path.strip("/").split("/") if s and "{" not in s]
        return segments[-1] if segments else ""


class RequestParams:
    """Query parameter normalization shared by resources and the transport."""

    @staticmethod
    def identifier_of(value: Any) -> Any:
        """Raw ids pass through; anything exposing ``id`` is replaced by it."""
        if value is None or isinstance(value, SCALAR_TYPES):
            return value
        if isinstance(value, Mapping):
            return value.get("id")
        identifier = getattr(value, "id", None)
        return value if identifier is None else identifier

    @staticmethod
    def normalize(params: Mapping[str, Any], aliases: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Rename aliased filters, substitute object ids and drop ``None`` values."""
        aliases = aliases or {}
        normalized: Dict[str, Any] = {}
        for key, value in params.items():
            if value is None:
                continue
            normalized[aliases.get(key, key)] = RequestParams.identifier_of(value)
        return normalized

    @staticmethod
    def encode(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Encode scalar values as query strings (booleans as ``true``/``false``)."""
        encoded: Dict[str, str] = {}
        for key, value in (params or {}).items():
            if value is None:
                continue
            if isinstance(value, bool):
                encoded[str(key)] = "true" if value else "false"
            else:
                encoded[str(key)] = str(value)
        return encoded


__all__ = [
    'LoggerFactory',
    'APIResponseProcessor',
    'RequestParams',
    'SCALAR_TYPES',
]
