"""
Base service class for Golf Genius resources.
Provides listing and fetch-by-id emulation over list-only endpoints.
"""

from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Tuple, Type

from ...core.error_handler import with_error_context
from ...core.exceptions import InvalidArgumentError, ResourceNotFoundError
from ...core.utils import APIResponseProcessor, LoggerFactory, RequestParams
from ..models.base import Record
from .pagination import Listing, Paginator, page_size_hint


class ResourceService:
    """
    Base class for top-level list resources.

    Subclasses declare ``resource_path`` and ``record_class``; the envelope
    keys default to the plural path basename and its singular form.
    """

    resource_path: str = ""
    record_class: Type[Record] = Record
    item_key: Optional[str] = None
    response_key: Optional[str] = None
    match_fields: Tuple[str, ...] = ("id",)
    archived_filter: Optional[str] = None
    page_size: Optional[int] = None
    filter_aliases: Mapping[str, str] = {}

    def __init__(self, client, paginator: Optional[Paginator] = None):
        """
        Initialize service with the owning client.

        Args:
            client: ``GolfGeniusClient`` supplying the transport, settings and default API key
            paginator: Paginator to list through (defaults to the client's)
        """
        self.client = client
        self.paginator = paginator or client.paginator
        self.settings = client.settings
        self.logger = LoggerFactory.get_logger(self.__class__.__name__)

        plural = APIResponseProcessor.resource_key(self.resource_path)
        if self.response_key is None:
            self.response_key = plural
        if self.item_key is None:
            self.item_key = APIResponseProcessor.singularize_resource_key(plural)

    @property
    def api_key(self) -> Optional[str]:
        return self.client.api_key

    @property
    def default_page_size(self) -> int:
        return self.page_size or self.settings.default_page_size

    def listing(self, api_key: Optional[str] = None) -> Listing:
        return Listing(
            path=self.resource_path,
            build=lambda raw: self.build(raw, api_key),
            response_key=self.response_key,
            item_key=self.item_key
        )

    def build(self, raw: Any, api_key: Optional[str] = None) -> Record:
        return self.record_class.construct_from(raw, api_key=api_key, client=self.client)

    def _split(self, query: Mapping[str, Any]) -> Tuple[Dict[str, Any], Optional[str]]:
        query = dict(query)
        api_key = query.pop("api_key", None) or self.api_key
        query.pop("max_pages", None)
        return RequestParams.normalize(query, self.filter_aliases), api_key

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @with_error_context("list")
    async def list(self, **query: Any) -> List[Record]:
        """One page when ``page`` is given, otherwise every page."""
        if query.get("page") not in (None, ""):
            params, api_key = self._split(query)
            return await self.paginator.list_one_page(self.listing(api_key), params, api_key)
        return await self.list_all(**query)

    @with_error_context("list_all")
    async def list_all(self, **query: Any) -> List[Record]:
        params, api_key = self._split(query)
        return await self.paginator.list_all(
            self.listing(api_key), params, api_key, page_size=self.page_size
        )

    async def auto_paging_each(self, **query: Any) -> AsyncIterator[Record]:
        """Iterate records across pages, fetching the next page only when needed."""
        params, api_key = self._split(query)
        async for record in self.paginator.auto_paging_each(
            self.listing(api_key), params, api_key, page_size=self.page_size
        ):
            yield record

    # ------------------------------------------------------------------
    # Identifier resolution
    # ------------------------------------------------------------------

    @with_error_context("fetch")
    async def fetch(self, identifier: Any, max_pages: Optional[int] = None, **query: Any) -> Record:
        """
        Find one record by id, scanning list pages.

        Raises:
            ResourceNotFoundError: If no page holds a record matching any of ``match_fields``
        """
        identifier = RequestParams.identifier_of(identifier)
        return await self._scan(self.match_fields, identifier, max_pages, query)

    @with_error_context("fetch_by")
    async def fetch_by(self, max_pages: Optional[int] = None, **criteria: Any) -> Record:
        """
        Find one record by exactly one matchable field, e.g. ``fetch_by(ggid="zz123")``.
        Non-matchable keys are sent as list filters.
        """
        matchable = [key for key in criteria if key in self.match_fields]
        if not matchable:
            raise InvalidArgumentError(
                "criteria", f"one of {', '.join(self.match_fields)} is required"
            )
        if len(matchable) > 1:
            raise InvalidArgumentError(
                "criteria", f"pass only one of {', '.join(matchable)}"
            )
        field_name = matchable[0]
        value = criteria.pop(field_name)
        return await self.fetch_by_field(field_name, value, max_pages=max_pages, **criteria)

    async def fetch_by_field(self, field_name: str, value: Any, max_pages: Optional[int] = None,
                             **query: Any) -> Record:
        if field_name not in self.match_fields:
            raise InvalidArgumentError(
                field_name, f"not matchable for {self.resource_path} (use {', '.join(self.match_fields)})"
            )
        value = RequestParams.identifier_of(value)
        if value is None or str(value) == "":
            raise InvalidArgumentError(field_name, "value must not be empty")
        return await self._scan((field_name,), value, max_pages, query)

    async def _scan(self, fields: Tuple[str, ...], value: Any, max_pages: Optional[int],
                    query: Mapping[str, Any]) -> Record:
        if max_pages is None:
            max_pages = self.settings.max_fetch_pages
        found = await self._scan_pages(fields, value, max_pages, query)
        if found is not None:
            return found

        if self.archived_filter and query.get(self.archived_filter) is None:
            self.logger.info(
                f"{value} not found in {self.resource_path}; retrying with {self.archived_filter}=true"
            )
            retry_query = {**query, self.archived_filter: True}
            found = await self._scan_pages(fields, value, max_pages, retry_query)
            if found is not None:
                return found

        raise ResourceNotFoundError(self.resource_path, value, fields=fields)

    async def _scan_pages(self, fields: Tuple[str, ...], value: Any, max_pages: int,
                          query: Mapping[str, Any]) -> Optional[Record]:
        params, api_key = self._split(query)
        params.pop("page", None)
        expected = page_size_hint(params, self.default_page_size)
        listing = self.listing(api_key)
        target = str(value)

        for page in range(1, max_pages + 1):
            records = await self.paginator.fetch_page(listing, params, page, api_key)
            if not records:
                return None

            for record in records:
                for field_name in fields:
                    candidate = record.get(field_name)
                    if candidate is not None and str(candidate) == target:
                        return record

            if len(records) < expected:
                return None

        self.logger.debug(f"Stopped scanning {self.resource_path} after {max_pages} pages")
        return None
