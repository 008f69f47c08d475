"""
Tee sheet records: pairing groups and the players within them.
"""

from typing import Any, Dict, List

from .base import Record


class TeeSheetPlayer(Record):
    """Player slot within a pairing group (name, position, scores)."""


class TeeSheetGroup(Record):
    """A pairing group in a round tee sheet."""

    @classmethod
    def _prepare(cls, attributes: Dict[str, Any]) -> Dict[str, Any]:
        tee_time = attributes.get("tee_time")
        if isinstance(tee_time, str):
            attributes["tee_time"] = tee_time.strip()
        return attributes

    @property
    def players(self) -> List[TeeSheetPlayer]:
        raw = self._attributes.get("players")
        if raw is None:
            return []
        if not isinstance(raw, tuple):
            raw = [raw]
        players = []
        for item in raw:
            player = self._as(item, TeeSheetPlayer)
            if isinstance(player, TeeSheetPlayer):
                players.append(player)
        return players
