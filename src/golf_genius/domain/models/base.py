"""
Base record model for Golf Genius API payloads.
Converts nested JSON into immutable, attribute-rich records.
"""

import json
import re
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type, TypeVar

from ...core.exceptions import ArityError, ConfigurationError, MalformedResponseError

R = TypeVar('R', bound='Record')

_NON_IDENTIFIER = re.compile(r"\W")

_TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%B %d, %Y",
)

_MISSING = object()


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an API date/time string, or return None when it is not one."""
    text = value.strip()
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def is_timestamp_attribute(name: str) -> bool:
    return name == "date" or name.endswith("_at") or name.endswith("_date")


def normalize_key(key: Any) -> str:
    """Identifier form of a payload key (non-identifier characters become ``_``)."""
    return _NON_IDENTIFIER.sub("_", str(key))


def truthy(value: Any) -> bool:
    """Predicate coercion: True only for ``True`` or the string ``"true"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


class Record:
    """
    Immutable record built from one API object.

    Every read goes through ``_lookup``: the exact attribute name first, then
    for names ending in ``?`` the boolean coercion of the bare attribute.
    """

    def __init__(self, attributes: Mapping[str, Any], api_key: Optional[str] = None, client: Any = None):
        if isinstance(attributes, Record):
            attributes = attributes.to_dict()
        if not isinstance(attributes, Mapping):
            raise MalformedResponseError("object", attributes)

        object.__setattr__(self, "_api_key", api_key)
        object.__setattr__(self, "_client", client)

        converted: Dict[str, Any] = {}
        for key, value in attributes.items():
            name = normalize_key(key)
            converted[name] = self._convert(name, value)
        converted = self._prepare(converted)
        object.__setattr__(self, "_attributes", MappingProxyType(converted))

    @classmethod
    def construct_from(cls: Type[R], raw: Any, api_key: Optional[str] = None, client: Any = None) -> R:
        """Build a record (and all nested records) from a raw payload."""
        return cls(raw, api_key=api_key, client=client)

    @classmethod
    def _prepare(cls, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for subclasses to adjust converted attributes before freezing."""
        return attributes

    def _convert(self, name: str, value: Any) -> Any:
        if isinstance(value, (Record, datetime)):
            return value
        if isinstance(value, Mapping):
            return Record(value, api_key=self._api_key, client=self._client)
        if isinstance(value, (list, tuple)):
            return tuple(self._convert("", item) for item in value)
        if isinstance(value, str) and is_timestamp_attribute(name):
            parsed = parse_timestamp(value)
            return value if parsed is None else parsed
        return value

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lookup(self, name: str) -> Any:
        if name in self._attributes:
            return self._attributes[name]
        if name.endswith("?") and len(name) > 1:
            return truthy(self._attributes.get(name[:-1]))
        raise KeyError(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._lookup(name)
        except KeyError:
            raise AttributeError(
                f"{self.__class__.__name__!r} object has no attribute {name!r}"
            ) from None

    def __getitem__(self, name: str) -> Any:
        return self._lookup(name)

    def get(self, name: str, default: Any = None) -> Any:
        try:
            return self._lookup(name)
        except KeyError:
            return default

    def has(self, name: str) -> bool:
        return name in self._attributes

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{self.__class__.__name__} records are immutable")

    def __delattr__(self, name: str):
        raise AttributeError(f"{self.__class__.__name__} records are immutable")

    # ------------------------------------------------------------------
    # Mapping-like helpers
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> Mapping[str, Any]:
        return self._attributes

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def keys(self) -> List[str]:
        return list(self._attributes.keys())

    def items(self) -> List[Tuple[str, Any]]:
        return list(self._attributes.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict; timestamps rendered as ISO-8601 strings."""
        return {key: _unwrap(value) for key, value in self._attributes.items()}

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self) -> str:
        identifier = self._attributes.get("id")
        label = f" id={identifier!r}" if identifier is not None else ""
        return f"<{self.__class__.__name__}{label} {self.to_json()}>"

    # ------------------------------------------------------------------
    # Helpers for typed subclasses
    # ------------------------------------------------------------------

    def _typed(self, name: str, record_class: Type[R]) -> Any:
        """Re-type a nested attribute as ``record_class`` (sequences element-wise, as a fresh list)."""
        raw = self._attributes.get(name)
        if isinstance(raw, tuple):
            return [self._as(item, record_class) for item in raw if item not in (None, "", {})]
        return self._as(raw, record_class)

    def _as(self, raw: Any, record_class: Type[R]) -> Any:
        if raw is None or raw == "":
            return None
        if isinstance(raw, record_class):
            return raw
        if isinstance(raw, Record):
            if not len(raw):
                return None
            return record_class(dict(raw.items()), api_key=self._api_key, client=self._client)
        return raw

    def _require_client(self):
        if self._client is None:
            raise ConfigurationError(
                "client",
                f"{self.__class__.__name__} is not bound to a client; load it through GolfGeniusClient"
            )
        return self._client

    def _call_params(self, query: Dict[str, Any]) -> Dict[str, Any]:
        if self._api_key and "api_key" not in query:
            query["api_key"] = self._api_key
        return query


def parent_reference(args: Tuple[Any, ...], query: Dict[str, Any], parent: str, resource: str) -> Any:
    """
    Take the last parent of a bound accessor positionally, or by keyword
    (``round=`` / ``round_id=``). The keyword is removed from ``query``.
    """
    keyword = query.pop(parent, _MISSING)
    keyword_id = query.pop(f"{parent}_id", _MISSING)
    if len(args) > 1:
        raise ArityError(resource, [f"{parent}_id"], len(args))
    if args:
        return args[0]
    for candidate in (keyword, keyword_id):
        if candidate is not _MISSING and candidate is not None:
            return candidate
    raise ArityError(resource, [f"{parent}_id"], 0)


def _unwrap(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_unwrap(item) for item in value]
    return value
