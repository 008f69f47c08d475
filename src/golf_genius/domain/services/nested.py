"""
Declarative nested and deep-nested resources.

A ``NestedResource`` is bound to a path template with one placeholder per
parent id. Resolving it builds the path, fetches one or all pages, unwraps
items, injects parent context and applies client-side filters and sorting.
"""

import string
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type, Union
from urllib.parse import quote

from ...core.exceptions import ArityError, InvalidArgumentError, MalformedResponseError
from ...core.utils import APIResponseProcessor, LoggerFactory, RequestParams
from ..models.base import Record
from .pagination import Listing, Paginator

logger = LoggerFactory.get_logger(__name__)

ClientFilter = Union[str, Callable[[Record, Any], bool]]


def template_fields(path: str) -> Tuple[str, ...]:
    """Placeholder names in a ``str.format`` path template, in order."""
    return tuple(name for _, name, _, _ in string.Formatter().parse(path) if name)


def _sort_key(attribute: str):
    """Total ordering: None first, then numbers (numeric strings included), then text."""
    def key(record: Record):
        value = record.get(attribute)
        if value is None:
            return (0,)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return (1, value)
        try:
            return (1, float(str(value)))
        except ValueError:
            return (2, str(value))
    return key


@dataclass(frozen=True)
class NestedResource:
    """A sub-resource reached through one or more parent ids."""
    name: str
    path: str
    parent_ids: Tuple[str, ...]
    returns: str = "list"
    record_class: Type[Record] = Record
    item_key: Optional[str] = None
    response_key: Optional[str] = None
    attribute_aliases: Mapping[str, str] = field(default_factory=dict)
    inject_parent: Mapping[str, str] = field(default_factory=dict)
    sort_by: Optional[str] = None
    paginated: bool = False
    page_size: Optional[int] = None
    client_filters: Mapping[str, ClientFilter] = field(default_factory=dict)

    def __post_init__(self):
        if self.returns not in ("list", "object"):
            raise InvalidArgumentError("returns", f"must be 'list' or 'object', got {self.returns!r}")
        unknown = set(self.inject_parent.values()) - set(self.parent_ids)
        if unknown:
            raise InvalidArgumentError(
                "inject_parent", f"unknown placeholders {sorted(unknown)} for {self.path}"
            )

    def build_path(self, parents: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
        """Substitute parent ids into the template; returns the path and the id map."""
        if len(parents) != len(self.parent_ids):
            raise ArityError(self.name, self.parent_ids, len(parents))
        ids: Dict[str, Any] = {}
        for placeholder, parent in zip(self.parent_ids, parents):
            identifier = RequestParams.identifier_of(parent)
            if identifier is None or str(identifier) == "":
                raise InvalidArgumentError(placeholder, f"{self.name} requires a non-empty {placeholder}")
            ids[placeholder] = identifier
        path = self.path.format(**{key: quote(str(value), safe="") for key, value in ids.items()})
        return path, ids

    async def resolve(self, paginator: Paginator, *parents: Any, **query: Any) -> Any:
        """Fetch this resource for the given parent ids."""
        api_key = query.pop("api_key", None)
        filters = [
            (key, query.pop(key), test)
            for key, test in self.client_filters.items()
            if key in query
        ]
        query = RequestParams.normalize(query)
        path, ids = self.build_path(parents)
        client = getattr(paginator, "client", None)

        if self.returns == "object":
            return await self._resolve_object(paginator, path, ids, query, api_key, client)

        listing = Listing(
            path=path,
            build=lambda raw: self._construct(raw, ids, api_key, client),
            response_key=self.response_key,
            item_key=self.item_key
        )
        if self.paginated and query.get("page") in (None, ""):
            records = await paginator.list_all(listing, query, api_key, page_size=self.page_size)
        else:
            page = query.get("page")
            records = await paginator.fetch_page(
                listing, query, int(page) if page not in (None, "") else None, api_key
            )

        for key, value, test in filters:
            records = [record for record in records if self._matches(record, test, value)]

        if self.sort_by:
            records = sorted(records, key=_sort_key(self.sort_by))

        logger.debug(f"Resolved {len(records)} {self.name} from {path}")
        return records

    async def _resolve_object(self, paginator: Paginator, path: str, ids: Dict[str, Any],
                              query: Dict[str, Any], api_key: Optional[str], client: Any) -> Record:
        params = {key: value for key, value in query.items() if value is not None and key != "max_pages"}
        response = await paginator.transport.execute("GET", path, params, api_key)
        if not isinstance(response, dict):
            raise MalformedResponseError("object", response)
        return self._construct(response, ids, api_key, client)

    def _construct(self, raw: Any, ids: Dict[str, Any], api_key: Optional[str], client: Any) -> Record:
        raw = APIResponseProcessor.unwrap_item(raw, self.item_key)
        if not isinstance(raw, dict):
            raise MalformedResponseError("object", raw)
        attributes = dict(raw)
        for exposed, source in self.attribute_aliases.items():
            if source in attributes:
                attributes[exposed] = attributes[source]
        for child_attribute, placeholder in self.inject_parent.items():
            if attributes.get(child_attribute) is None:
                attributes[child_attribute] = ids[placeholder]
        return self.record_class.construct_from(attributes, api_key=api_key, client=client)

    @staticmethod
    def _matches(record: Record, test: ClientFilter, value: Any) -> bool:
        if callable(test):
            return bool(test(record, value))
        return record.get(test) == value


def nested_resource(name: str, path: str, **options: Any) -> NestedResource:
    """A resource under exactly one parent (``/events/{event_id}/rounds``)."""
    parent_ids = template_fields(path)
    if len(parent_ids) != 1:
        raise InvalidArgumentError("path", f"{path} must contain exactly one placeholder")
    return NestedResource(name=name, path=path, parent_ids=parent_ids, **options)


def deep_nested_resource(name: str, path: str, **options: Any) -> NestedResource:
    """A resource under two or more ordered parents."""
    parent_ids = template_fields(path)
    if len(parent_ids) < 2:
        raise InvalidArgumentError("path", f"{path} must contain at least two placeholders")
    return NestedResource(name=name, path=path, parent_ids=parent_ids, **options)


__all__: List[str] = [
    "NestedResource",
    "nested_resource",
    "deep_nested_resource",
    "template_fields",
]
