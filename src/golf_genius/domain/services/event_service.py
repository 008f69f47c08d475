"""
Event service: event listing and lookup plus the event-scoped
sub-resources (roster, rounds, courses, divisions, tournaments, tee sheets
and tournament results).
"""

from typing import Any, List

from ...core.error_handler import with_error_context
from ..models.event import Course, Division, Event, Round, Tournament, TournamentResults
from ..models.player import RosterMember
from ..models.tee_sheet import TeeSheetGroup
from .base_service import ResourceService
from .nested import deep_nested_resource, nested_resource

EVENT_PAGE_SIZE = 100

ROSTER = nested_resource(
    "roster", "/events/{event_id}/roster",
    record_class=RosterMember,
    item_key="member",
    attribute_aliases={"photo_url": "photo"},
    paginated=True,
    page_size=EVENT_PAGE_SIZE,
    client_filters={"waitlist": "waitlist"},
)

ROUNDS = nested_resource(
    "rounds", "/events/{event_id}/rounds",
    record_class=Round,
    item_key="round",
    inject_parent={"event_id": "event_id"},
    sort_by="index",
    paginated=True,
    page_size=EVENT_PAGE_SIZE,
)

COURSES = nested_resource(
    "courses", "/events/{event_id}/courses",
    record_class=Course,
    response_key="courses",
    paginated=True,
    page_size=EVENT_PAGE_SIZE,
)

DIVISIONS = nested_resource(
    "divisions", "/events/{event_id}/divisions",
    record_class=Division,
    item_key="division",
)

TOURNAMENTS = deep_nested_resource(
    "tournaments", "/events/{event_id}/rounds/{round_id}/tournaments",
    record_class=Tournament,
    inject_parent={"event_id": "event_id", "round_id": "round_id"},
    paginated=True,
    page_size=EVENT_PAGE_SIZE,
)

TEE_SHEET = deep_nested_resource(
    "tee_sheet", "/events/{event_id}/rounds/{round_id}/tee_sheet",
    record_class=TeeSheetGroup,
    inject_parent={"event_id": "event_id", "round_id": "round_id"},
    paginated=True,
)

TOURNAMENT_RESULTS = deep_nested_resource(
    "tournament_results", "/events/{event_id}/rounds/{round_id}/tournaments/{tournament_id}.json",
    returns="object",
    record_class=TournamentResults,
    inject_parent={
        "event_id": "event_id",
        "round_id": "round_id",
        "tournament_id": "tournament_id",
    },
)


class EventService(ResourceService):
    """
    Events, matched on ``id`` or ``ggid``.
    Lookups retry once against archived events unless ``archived`` is given.
    """

    resource_path = "/events"
    record_class = Event
    match_fields = ("id", "ggid")
    archived_filter = "archived"
    page_size = EVENT_PAGE_SIZE
    filter_aliases = {
        "season_id": "season",
        "category_id": "category",
        "directory_id": "directory",
    }

    async def _resolve(self, resource, *parents: Any, **query: Any) -> Any:
        query.setdefault("api_key", self.api_key)
        if query["api_key"] is None:
            query.pop("api_key")
        return await resource.resolve(self.paginator, *parents, **query)

    @with_error_context("roster")
    async def roster(self, event: Any, **query: Any) -> List[RosterMember]:
        """Event roster; ``waitlist=`` is applied client-side."""
        return await self._resolve(ROSTER, event, **query)

    @with_error_context("rounds")
    async def rounds(self, event: Any, **query: Any) -> List[Round]:
        """Event rounds ordered by ``index``, each carrying ``event_id``."""
        return await self._resolve(ROUNDS, event, **query)

    @with_error_context("courses")
    async def courses(self, event: Any, **query: Any) -> List[Course]:
        return await self._resolve(COURSES, event, **query)

    @with_error_context("divisions")
    async def divisions(self, event: Any, **query: Any) -> List[Division]:
        return await self._resolve(DIVISIONS, event, **query)

    @with_error_context("tournaments")
    async def tournaments(self, event: Any, round_ref: Any, **query: Any) -> List[Tournament]:
        return await self._resolve(TOURNAMENTS, event, round_ref, **query)

    @with_error_context("tee_sheet")
    async def tee_sheet(self, event: Any, round_ref: Any, **query: Any) -> List[TeeSheetGroup]:
        return await self._resolve(TEE_SHEET, event, round_ref, **query)

    @with_error_context("tournament_results")
    async def tournament_results(self, event: Any, round_ref: Any, tournament: Any,
                                 **query: Any) -> TournamentResults:
        return await self._resolve(TOURNAMENT_RESULTS, event, round_ref, tournament, **query)
