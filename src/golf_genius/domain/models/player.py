"""
Player records: master roster players, event roster members and their
handicap and tee details.
"""

from typing import Any, Optional

from .base import Record


class Handicap(Record):
    """Handicap details; short aliases for the network-prefixed attribute names."""

    @property
    def network_id(self) -> Optional[Any]:
        return self.get("handicap_network_id")

    @property
    def index(self) -> Optional[Any]:
        return self.get("handicap_index")

    @property
    def nine_hole_index(self) -> Optional[Any]:
        return self.get("nine_hole_handicap_index")


class Tee(Record):
    """Tee assignment (name, color, rating, slope)."""


class _HandicappedRecord(Record):

    @property
    def handicap(self) -> Optional[Handicap]:
        return self._typed("handicap", Handicap)

    @property
    def tee(self) -> Optional[Tee]:
        return self._typed("tee", Tee)


class Player(_HandicappedRecord):
    """A member of the master roster."""

    async def events(self, **query: Any) -> Record:
        """The player's event history (``member`` and ``events``)."""
        client = self._require_client()
        return await client.players.events(self, **self._call_params(query))


class RosterMember(_HandicappedRecord):
    """A player registered on one event's roster."""
