"""
Tests for the resource services: listing, fetch-by-id emulation and player lookups.
"""
import pytest

from golf_genius.core.exceptions import (
    APINotFoundError, InvalidArgumentError, NotFoundError, ResourceNotFoundError,
)
from golf_genius.domain.models import Category, Directory, Event, Player, Record, Season

from test_utils import TEST_API_KEY, GolfGeniusDataFactory


def two_page_events(transport):
    """event_001..025 on page 1 and event_026..030 on page 2, whatever the filters."""
    transport.set_pages("/events", [
        GolfGeniusDataFactory.numbered_events(1, 25),
        GolfGeniusDataFactory.numbered_events(26, 30),
    ])


class TestListing:

    @pytest.mark.asyncio
    async def test_list_all_seasons(self, client, transport, data):
        transport.set_response("/seasons", data.seasons())

        seasons = await client.seasons.list()

        assert [s.name for s in seasons] == ["2026 Season", "2025 Season"]
        assert all(isinstance(s, Season) for s in seasons)
        assert seasons[0]["current?"] is True
        assert transport.calls[0].api_key == TEST_API_KEY

    @pytest.mark.asyncio
    async def test_list_with_page_is_one_call(self, client, transport):
        two_page_events(transport)

        events = await client.events.list(page=2)

        assert len(events) == 5
        assert transport.call_count == 1
        assert transport.calls[0].params == {"page": 2}

    @pytest.mark.asyncio
    async def test_per_call_api_key_overrides_client_key(self, client, transport, data):
        transport.set_response("/categories", data.categories())

        await client.categories.list(api_key="other_key")

        assert transport.calls[0].api_key == "other_key"
        assert "api_key" not in transport.calls[0].params

    @pytest.mark.asyncio
    async def test_event_filter_aliases_and_object_ids(self, client, transport):
        transport.set_response("/events", [])
        season = Season.construct_from({"id": "season_001"})

        await client.events.list(season_id="season_001", category_id="cat_001")
        await client.events.list(season=season, archived=False)

        assert transport.calls[0].params == {"season": "season_001", "category": "cat_001", "page": 1}
        assert transport.calls[1].params == {"season": "season_001", "archived": False, "page": 1}

    @pytest.mark.asyncio
    async def test_auto_paging_each(self, client, transport):
        two_page_events(transport)

        ids = [event.id async for event in client.events.auto_paging_each(per_page=25)]

        assert len(ids) == 30
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_category_and_directory_events(self, client, transport, data):
        transport.set_response("/categories", data.categories())
        transport.set_response("/directories", data.directories())
        transport.set_response("/events", [data.event()])

        category = (await client.categories.list())[0]
        directory = (await client.directories.list())[0]
        assert isinstance(category, Category)
        assert isinstance(directory, Directory)

        by_category = await category.events()
        by_directory = await directory.events()

        assert isinstance(by_category[0], Event)
        assert transport.calls_to("/events")[0].params == {"category": "cat_001", "page": 1}
        assert transport.calls_to("/events")[1].params == {"directory": "dir_001", "page": 1}
        assert by_directory[0].season.name == "2026 Season"


class TestFetch:
    """Identifier resolution over list pages."""

    @pytest.mark.asyncio
    async def test_found_on_second_page(self, client, transport):
        two_page_events(transport)

        event = await client.events.fetch("event_028", per_page=25)

        assert event.name == "Event 28"
        assert [c.params["page"] for c in transport.calls] == [1, 2]
        assert all(c.params["per_page"] == 25 for c in transport.calls)

    @pytest.mark.asyncio
    async def test_default_page_size_scan(self, client, transport):
        transport.set_pages("/seasons", [
            [{"id": f"season_{i:03d}"} for i in range(1, 26)],
            [{"id": "season_026"}, {"id": "season_027", "name": "Match"}, {"id": "season_028"}],
        ])

        season = await client.seasons.fetch("season_027")

        assert season.name == "Match"
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_empty_active_set_falls_back_to_archived(self, client, transport, data):
        transport.set_handler(
            "/events",
            lambda params: [data.event("event_001", archived=True)] if params.get("archived") else []
        )

        event = await client.events.fetch("event_001")

        assert event["archived?"] is True
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_match_on_secondary_field(self, client, transport, data):
        transport.set_response("/events", [data.event("event_001"), data.event("event_002")])

        event = await client.events.fetch("gg_event_002")

        assert event.id == "event_002"
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_identifiers_compare_as_strings(self, client, transport):
        transport.set_response("/seasons", [{"id": 101, "name": "Numeric"}])

        season = await client.seasons.fetch("101")

        assert season.name == "Numeric"

    @pytest.mark.asyncio
    async def test_empty_page_is_not_found(self, client, transport):
        transport.set_response("/seasons", [])

        with pytest.raises(ResourceNotFoundError) as exc_info:
            await client.seasons.fetch("season_404")

        assert isinstance(exc_info.value, NotFoundError)
        assert "Resource not found: /seasons season_404" in str(exc_info.value)
        assert exc_info.value.context.operation == "fetch"
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_max_pages_bounds_the_scan(self, client, transport):
        transport.set_handler("/seasons", lambda params: [
            {"id": f"season_{params['page']}_{i}"} for i in range(25)
        ])

        with pytest.raises(ResourceNotFoundError):
            await client.seasons.fetch("missing", max_pages=3)

        assert transport.call_count == 3

    @pytest.mark.asyncio
    async def test_archived_fallback(self, client, transport, data):
        archived = data.event("event_old", archived=True)
        transport.set_handler(
            "/events",
            lambda params: [archived] if params.get("archived") is True else [data.event()]
        )

        event = await client.events.fetch("event_old")

        assert event.id == "event_old"
        assert transport.call_count == 2
        assert "archived" not in transport.calls[0].params
        assert transport.calls[1].params["archived"] is True

    @pytest.mark.asyncio
    async def test_not_found_after_fallback(self, client, transport):
        two_page_events(transport)

        with pytest.raises(ResourceNotFoundError):
            await client.events.fetch("event_999", per_page=25)

        assert transport.call_count == 4
        assert [c.params.get("archived") for c in transport.calls] == [None, None, True, True]

    @pytest.mark.asyncio
    async def test_pinned_archived_filter_disables_fallback(self, client, transport, data):
        transport.set_response("/events", [data.event()])

        with pytest.raises(ResourceNotFoundError):
            await client.events.fetch("event_999", archived=False)

        assert transport.call_count == 1
        assert transport.calls[0].params["archived"] is False

    @pytest.mark.asyncio
    async def test_archived_none_is_unpinned(self, client, transport, data):
        archived = data.event("event_old", archived=True)
        transport.set_handler(
            "/events",
            lambda params: [archived] if params.get("archived") is True else [data.event()]
        )

        event = await client.events.fetch("event_old", archived=None)

        assert event.id == "event_old"
        assert "archived" not in transport.calls[0].params
        assert transport.calls[1].params["archived"] is True

    @pytest.mark.asyncio
    async def test_zero_max_pages_scans_nothing(self, client, transport, data):
        transport.set_response("/seasons", data.seasons())

        with pytest.raises(ResourceNotFoundError):
            await client.seasons.fetch("season_001", max_pages=0)

        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_resources_without_archived_filter_do_not_retry(self, client, transport, data):
        transport.set_response("/categories", data.categories())

        with pytest.raises(ResourceNotFoundError):
            await client.categories.fetch("cat_999")

        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_fetch_accepts_record(self, client, transport, data):
        transport.set_response("/seasons", data.seasons())

        season = await client.seasons.fetch(Season.construct_from({"id": "season_002"}))

        assert season.name == "2025 Season"


class TestFetchBy:

    @pytest.mark.asyncio
    async def test_fetch_by_matchable_field(self, client, transport, data):
        transport.set_response("/events", [data.event("event_001"), data.event("event_002")])

        event = await client.events.fetch_by(ggid="gg_event_002", season="season_001")

        assert event.id == "event_002"
        assert transport.calls[0].params == {"season": "season_001", "page": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("criteria", [
        {"name": "Spring Championship"},
        {"id": "event_001", "ggid": "gg_event_001"},
        {"ggid": ""},
        {},
    ])
    async def test_fetch_by_rejects_bad_criteria(self, client, transport, criteria):
        with pytest.raises(InvalidArgumentError):
            await client.events.fetch_by(**criteria)

        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_fetch_by_field_rejects_unknown_field(self, client):
        with pytest.raises(InvalidArgumentError):
            await client.seasons.fetch_by_field("name", "2026 Season")


class TestPlayers:
    """Master roster lookups."""

    @pytest.mark.asyncio
    async def test_fetch_by_email_uses_member_endpoint(self, client, transport):
        transport.set_response(
            "/master_roster_member/john%40example.com",
            {"member": {"id": "player_001", "name": "John Smith", "email": "john@example.com"}}
        )

        player = await client.players.fetch_by(email="john@example.com")

        assert isinstance(player, Player)
        assert player.name == "John Smith"
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_fetch_by_id_scans_master_roster(self, client, transport, data):
        transport.set_response("/master_roster", data.roster())

        player = await client.players.fetch_by(id="player_002")

        assert player.name == "Jane Doe"
        assert transport.calls[0].path == "/master_roster"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("criteria", [
        {"id": "player_001", "email": "john@example.com"},
        {},
        {"name": "John Smith"},
        {"email": "john@example.com", "status": "active"},
    ])
    async def test_fetch_by_requires_exactly_one_of_id_or_email(self, client, transport, criteria):
        with pytest.raises(InvalidArgumentError):
            await client.players.fetch_by(**criteria)

        assert transport.call_count == 0

    @pytest.mark.asyncio
    async def test_missing_email_propagates_api_not_found(self, client, transport):
        transport.set_response("/master_roster_member/nobody%40example.com", APINotFoundError("Not found"))

        with pytest.raises(NotFoundError):
            await client.players.fetch_by(email="nobody@example.com")

    @pytest.mark.asyncio
    async def test_player_events(self, client, transport):
        transport.set_response("/players/player_001", {
            "member": {"id": "player_001", "name": "John Smith"},
            "events": ["event_001", "event_002"],
        })

        history = await client.players.events("player_001")

        assert isinstance(history, Record)
        assert isinstance(history.member, Player)
        assert history.member.name == "John Smith"
        assert history.events == ("event_001", "event_002")

    @pytest.mark.asyncio
    async def test_bound_player_events(self, client, transport):
        transport.set_response("/players/player_001", {"member": None, "events": []})
        player = Player.construct_from({"id": "player_001"}, client=client)

        history = await player.events()

        assert history.member is None
        assert history.events == ()
