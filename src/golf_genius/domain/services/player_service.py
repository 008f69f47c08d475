"""
Player service for the master roster.
"""

from typing import Any, Optional
from urllib.parse import quote

from ...core.error_handler import with_error_context
from ...core.exceptions import InvalidArgumentError, MalformedResponseError
from ...core.utils import APIResponseProcessor, RequestParams
from ..models.base import Record
from ..models.player import Player
from .base_service import ResourceService


class PlayerService(ResourceService):
    """
    Master roster players.
    ``fetch_by`` accepts exactly one of ``id`` (list scan) or ``email``
    (direct member endpoint).
    """

    resource_path = "/master_roster"
    record_class = Player
    item_key = "member"

    @with_error_context("fetch_by")
    async def fetch_by(self, max_pages: Optional[int] = None, **criteria: Any) -> Player:
        api_key = criteria.pop("api_key", None)
        email = criteria.pop("email", None)
        identifier = criteria.pop("id", None)

        if email and identifier:
            raise InvalidArgumentError("criteria", "pass either id or email, not both")
        if not email and not identifier:
            raise InvalidArgumentError("criteria", "email or id is required")
        if criteria:
            raise InvalidArgumentError(
                "criteria", f"only email or id is supported, got {', '.join(sorted(criteria))}"
            )

        if email:
            return await self.fetch_by_email(email, api_key=api_key)
        return await self.fetch(identifier, max_pages=max_pages, api_key=api_key)

    async def fetch_by_email(self, email: str, **query: Any) -> Player:
        """Fetch one player via ``/master_roster_member/{email}``."""
        params, api_key = self._split(query)
        path = f"/master_roster_member/{quote(str(email), safe='')}"
        response = await self.paginator.transport.execute("GET", path, params, api_key)
        raw = APIResponseProcessor.unwrap_item(response, self.item_key)
        if not isinstance(raw, dict):
            raise MalformedResponseError("object", response)
        return self.build(raw, api_key)

    @with_error_context("events")
    async def events(self, player: Any, **query: Any) -> Record:
        """
        Event history for a player.

        Returns:
            Record with ``member`` (a Player, or None) and ``events`` (tuple of event ids)
        """
        player_id = RequestParams.identifier_of(player)
        if player_id is None or str(player_id) == "":
            raise InvalidArgumentError("player_id", "player has no id")

        params, api_key = self._split(query)
        response = await self.paginator.transport.execute(
            "GET", f"/players/{quote(str(player_id), safe='')}", params, api_key
        )
        if not isinstance(response, dict):
            raise MalformedResponseError("object", response)

        member_attrs = response.get("member")
        member = self.build(member_attrs, api_key) if isinstance(member_attrs, dict) else None
        return Record.construct_from(
            {"member": member, "events": response.get("events")},
            api_key=api_key,
            client=self.client
        )
