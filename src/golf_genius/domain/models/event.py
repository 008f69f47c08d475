"""
Event records and the event-scoped records reached through them:
rounds, courses, divisions, tournaments and tournament results.
"""

from typing import Any, Dict, List, Optional

from ...core.exceptions import InvalidArgumentError, ResourceNotFoundError
from .base import Record, parent_reference
from .organization import Category, Directory, Season
from .player import RosterMember
from .tee_sheet import TeeSheetGroup


def _required(record: Record, names, label: str, loaded_via: str) -> List[Any]:
    values = []
    for name in names:
        value = record.get(name)
        if value is None or str(value) == "":
            raise InvalidArgumentError(
                name, f"{label} has no {name} (load it via {loaded_via} to get it)"
            )
        values.append(value)
    return values


async def _find_round(record: Record, label: str, loaded_via: str, query: Dict[str, Any]) -> "Round":
    event_id, round_id = _required(record, ("event_id", "round_id"), label, loaded_via)
    client = record._require_client()
    rounds = await client.events.rounds(event_id, **record._call_params(query))
    for candidate in rounds:
        if str(candidate.get("id")) == str(round_id):
            return candidate
    raise ResourceNotFoundError("round", round_id)


class Event(Record):
    """
    A Golf Genius event (tournament, league or trip).

    Embedded ``season``, ``category`` and ``directories`` are exposed as typed
    records; sub-resources are fetched through the bound client.
    """

    @property
    def season(self) -> Optional[Season]:
        return self._typed("season", Season)

    @property
    def category(self) -> Optional[Category]:
        return self._typed("category", Category)

    @property
    def directories(self) -> List[Directory]:
        raw = self._attributes.get("directories")
        if raw is None:
            return []
        if not isinstance(raw, tuple):
            raw = [raw]
        directories = []
        for item in raw:
            if isinstance(item, Record) and isinstance(item.get("directory"), Record):
                item = item["directory"]
            directory = self._as(item, Directory)
            if isinstance(directory, Directory):
                directories.append(directory)
        return directories

    async def roster(self, **query: Any) -> List[RosterMember]:
        return await self._events().roster(self, **self._call_params(query))

    async def rounds(self, **query: Any) -> List["Round"]:
        return await self._events().rounds(self, **self._call_params(query))

    async def courses(self, **query: Any) -> List["Course"]:
        return await self._events().courses(self, **self._call_params(query))

    async def divisions(self, **query: Any) -> List["Division"]:
        return await self._events().divisions(self, **self._call_params(query))

    async def tournaments(self, *args: Any, **query: Any) -> List["Tournament"]:
        """Tournaments for one round: ``event.tournaments(round)`` or ``event.tournaments(round_id=...)``."""
        round_ref = parent_reference(args, query, "round", "tournaments")
        return await self._events().tournaments(self, round_ref, **self._call_params(query))

    async def tee_sheet(self, *args: Any, **query: Any) -> List[TeeSheetGroup]:
        round_ref = parent_reference(args, query, "round", "tee_sheet")
        return await self._events().tee_sheet(self, round_ref, **self._call_params(query))

    async def tournament_results(self, round_ref: Any, *args: Any, **query: Any) -> "TournamentResults":
        tournament_ref = parent_reference(args, query, "tournament", "tournament_results")
        return await self._events().tournament_results(
            self, round_ref, tournament_ref, **self._call_params(query)
        )

    def _events(self):
        return self._require_client().events


class Round(Record):
    """One day (or unit) of play within an event; carries ``event_id`` when loaded via the event."""

    async def tournaments(self, **query: Any) -> List["Tournament"]:
        event_id, = _required(self, ("event_id",), "Round", "event.rounds")
        client = self._require_client()
        return await client.events.tournaments(event_id, self, **self._call_params(query))

    async def tee_sheet(self, **query: Any) -> List[TeeSheetGroup]:
        event_id, = _required(self, ("event_id",), "Round", "event.rounds")
        client = self._require_client()
        return await client.events.tee_sheet(event_id, self, **self._call_params(query))


class Course(Record):
    """A course (with its tees) used by an event."""


class Division(Record):
    """An external division of an event."""


class Tournament(Record):
    """A scoring competition or flight within one round."""

    async def fetch_event(self, **query: Any) -> Event:
        event_id, = _required(self, ("event_id",), "Tournament", "event.tournaments")
        client = self._require_client()
        return await client.events.fetch(event_id, **self._call_params(query))

    async def fetch_round(self, **query: Any) -> Round:
        return await _find_round(self, "Tournament", "event.tournaments", query)

    async def results(self, **query: Any) -> "TournamentResults":
        event_id, round_id = _required(self, ("event_id", "round_id"), "Tournament", "event.tournaments")
        client = self._require_client()
        return await client.events.tournament_results(
            event_id, round_id, self, **self._call_params(query)
        )


class TournamentResults(Record):
    """Results payload for one round tournament."""

    async def fetch_event(self, **query: Any) -> Event:
        event_id, = _required(self, ("event_id",), "TournamentResults", "event.tournament_results")
        client = self._require_client()
        return await client.events.fetch(event_id, **self._call_params(query))

    async def fetch_round(self, **query: Any) -> Round:
        return await _find_round(self, "TournamentResults", "event.tournament_results", query)

    async def fetch_tournament(self, **query: Any) -> Tournament:
        event_id, round_id, tournament_id = _required(
            self, ("event_id", "round_id", "tournament_id"),
            "TournamentResults", "event.tournament_results"
        )
        client = self._require_client()
        tournaments = await client.events.tournaments(event_id, round_id, **self._call_params(query))
        for candidate in tournaments:
            if str(candidate.get("id")) == str(tournament_id):
                return candidate
        raise ResourceNotFoundError("tournament", tournament_id)
