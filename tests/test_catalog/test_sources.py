"""Tests for the Sleeper catalog source and the synthetic generator."""

import asyncio

import httpx
import pytest

from snakedraft.catalog import (
    BYE_WEEKS,
    CatalogError,
    SleeperCatalogSource,
    generate_pool,
    is_draftable,
    player_from_sleeper,
)
from snakedraft.catalog.sources import DEFAULT_AGE
from snakedraft.core.enums import Position

URL = "https://sleeper.test/v1/players/nfl"


def record(player_id, **overrides):
    data = {
        "player_id": player_id,
        "full_name": f"Player {player_id}",
        "position": "WR",
        "team": "KC",
        "active": True,
        "status": "Active",
        "search_rank": int(player_id) * 10,
        "age": 26,
        "years_exp": 4,
    }
    data.update(overrides)
    return data


RECORDS = {
    "1": record("1", position="QB", search_rank=5),
    "2": record("2", position="K"),
    "3": record("3", active=False),
    "4": record("4", search_rank=999999),
    "5": record("5", team=None),
    "6": record("6", years_exp=16),
    "7": record("7", full_name=None, first_name="Puka", last_name="Nacua",
                search_rank=2, age=None, team="LAR"),
    "8": record("8", status="Injured Reserve"),
    "9": record("9", position="TE", search_rank=None),
}


def source_for(handler, **kwargs):
    return SleeperCatalogSource(
        URL, retry_delay=0, transport=httpx.MockTransport(handler), **kwargs
    )


class TestIsDraftable:

    @pytest.mark.parametrize("player_id,expected", [
        ("1", True), ("2", False), ("3", False), ("4", False), ("5", False),
        ("6", False), ("7", True), ("8", False), ("9", False),
    ])
    def test_filters(self, player_id, expected):
        assert is_draftable(RECORDS[player_id]) is expected

    def test_blocklist(self):
        assert not is_draftable(RECORDS["1"], blocklist=frozenset({"1"}))


class TestPlayerFromSleeper:

    def test_maps_fields(self):
        player = player_from_sleeper(RECORDS["1"])
        assert player.player_id == "1"
        assert player.position == Position.QB
        assert player.rank == 5
        assert player.tier == 1
        assert player.bye_week == BYE_WEEKS["KC"]

    def test_name_and_age_defaults(self):
        player = player_from_sleeper(RECORDS["7"])
        assert player.name == "Puka Nacua"
        assert player.age == DEFAULT_AGE


class TestSleeperCatalogSource:

    def test_fetch_filters_and_sorts(self):
        source = source_for(lambda request: httpx.Response(200, json=RECORDS))
        players = asyncio.run(source.fetch_players(10))
        assert [p.player_id for p in players] == ["7", "1"]

    def test_limit(self):
        source = source_for(lambda request: httpx.Response(200, json=RECORDS))
        assert [p.player_id for p in asyncio.run(source.fetch_players(1))] == ["7"]

    def test_server_error_is_retried(self):
        responses = [httpx.Response(503), httpx.Response(200, json=RECORDS)]
        source = source_for(lambda request: responses.pop(0))
        assert len(asyncio.run(source.fetch_players(10))) == 2

    def test_persistent_server_error(self):
        source = source_for(lambda request: httpx.Response(500), max_retries=2)
        with pytest.raises(CatalogError):
            asyncio.run(source.fetch_players(10))

    def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        with pytest.raises(CatalogError, match="404"):
            asyncio.run(source_for(handler).fetch_players(10))
        assert len(calls) == 1

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CatalogError, match="request error"):
            asyncio.run(source_for(handler).fetch_players(10))

    def test_unexpected_shape(self):
        source = source_for(lambda request: httpx.Response(200, json=[1, 2, 3]))
        with pytest.raises(CatalogError, match="shape"):
            asyncio.run(source.fetch_players(10))

    def test_nothing_draftable(self):
        source = source_for(lambda request: httpx.Response(200, json={"2": RECORDS["2"]}))
        with pytest.raises(CatalogError, match="No players"):
            asyncio.run(source.fetch_players(10))


class TestGeneratePool:

    def test_ranked_and_seeded(self):
        pool = generate_pool(60, seed=3)
        assert [p.rank for p in pool] == list(range(1, 61))
        assert [p.name for p in pool] == [p.name for p in generate_pool(60, seed=3)]

    def test_every_position_present_early(self):
        pool = generate_pool(20, seed=0)
        assert {p.position for p in pool} == set(Position)
