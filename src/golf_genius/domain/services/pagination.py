"""
Pagination engine for list endpoints.
Fetches one page or walks pages until the listing is exhausted, guarding
against upstreams that ignore the ``page`` parameter.
"""

from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable, Dict, List, Mapping, Optional

from ...core.exceptions import InvalidArgumentError
from ...core.utils import APIResponseProcessor, LoggerFactory
from ..models.base import Record

logger = LoggerFactory.get_logger(__name__)

RESERVED_KEYS = ("api_key", "max_pages")
PAGE_SIZE_KEYS = ("per_page", "limit")


@dataclass(frozen=True)
class Listing:
    """Where a list lives and how its items become records."""
    path: str
    build: Callable[[Dict[str, Any]], Record]
    response_key: Optional[str] = None
    item_key: Optional[str] = None


@dataclass
class Page:
    """Records returned by one transport call."""
    number: Optional[int]
    records: List[Record] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def first_identity(self) -> Any:
        if not self.records:
            return None
        first = self.records[0]
        identifier = first.get("id")
        return identifier if identifier is not None else first.to_dict()


def page_size_hint(query: Mapping[str, Any], declared: Optional[int] = None) -> Optional[int]:
    """Expected items per page: ``per_page``, then ``limit``, then the declared size."""
    for key in PAGE_SIZE_KEYS:
        value = query.get(key)
        if value not in (None, ""):
            return int(value)
    return declared


class Paginator:
    """
    Single-page and all-pages listing over a transport.

    Every call keeps its own accumulation state; transport errors propagate
    unchanged.
    """

    def __init__(self, transport, client: Any = None):
        self.transport = transport
        self.client = client

    async def fetch_page(
        self,
        listing: Listing,
        query: Optional[Mapping[str, Any]] = None,
        page: Optional[int] = None,
        api_key: Optional[str] = None
    ) -> List[Record]:
        """Exactly one transport call; ``page=None`` sends no page parameter."""
        params = self._forwarded(query)
        params.pop("page", None)
        if page is not None:
            params["page"] = page

        logger.debug(f"Fetching {listing.path} page={page}")
        response = await self.transport.execute("GET", listing.path, params, api_key)

        items = APIResponseProcessor.extract_items(response, listing.response_key)
        records = []
        for item in items:
            raw = APIResponseProcessor.unwrap_item(item, listing.item_key)
            records.append(listing.build(raw))
        return records

    async def iter_pages(
        self,
        listing: Listing,
        query: Optional[Mapping[str, Any]] = None,
        api_key: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> AsyncIterator[Page]:
        """
        Yield pages starting at the query's ``page`` (default 1).

        Stops on an empty page, on a page identical in count and first id to
        the previous one (not yielded), or after a page shorter than the
        page-size hint.
        """
        query = dict(query or {})
        number = int(query.pop("page", None) or 1)
        hint = page_size_hint(query, page_size)
        previous: Optional[Page] = None

        while True:
            records = await self.fetch_page(listing, query, number, api_key)
            current = Page(number=number, records=records)

            if current.count == 0:
                return

            if (
                previous is not None
                and current.count == previous.count
                and current.first_identity == previous.first_identity
            ):
                logger.warning(
                    f"{listing.path} returned the same page for page={number}; "
                    f"the upstream appears to ignore paging, stopping"
                )
                return

            yield current

            if hint is not None and current.count < hint:
                return

            previous = current
            number += 1

    async def auto_paging_each(
        self,
        listing: Listing,
        query: Optional[Mapping[str, Any]] = None,
        api_key: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> AsyncIterator[Record]:
        """Yield records one at a time across pages; stop iterating to stop fetching."""
        async for page in self.iter_pages(listing, query, api_key, page_size):
            for record in page.records:
                yield record

    async def list_all(
        self,
        listing: Listing,
        query: Optional[Mapping[str, Any]] = None,
        api_key: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> List[Record]:
        records: List[Record] = []
        async for page in self.iter_pages(listing, query, api_key, page_size):
            records.extend(page.records)
        return records

    async def list_one_page(
        self,
        listing: Listing,
        query: Mapping[str, Any],
        api_key: Optional[str] = None
    ) -> List[Record]:
        if query.get("page") in (None, ""):
            raise InvalidArgumentError("page", "list_one_page requires an explicit page")
        return await self.fetch_page(listing, query, int(query["page"]), api_key)

    @staticmethod
    def _forwarded(query: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return {
            key: value for key, value in (query or {}).items()
            if key not in RESERVED_KEYS and value is not None
        }
