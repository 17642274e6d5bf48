"""Tests for roster slot eligibility."""

import pytest

from conftest import make_player
from snakedraft.core.draft import (
    assign_slot,
    available_slots,
    can_accept,
    eligible_categories,
    eligible_players,
)
from snakedraft.core.enums import ALL_POSITIONS, Position, RosterSlot
from snakedraft.core.models import Roster


class TestCanAccept:
    """Dedicated slot or SUPERFLEX."""

    def test_empty_roster_accepts_everything(self, empty_roster):
        assert all(can_accept(empty_roster, pos) for pos in ALL_POSITIONS)

    def test_second_player_at_position_uses_superflex(self, empty_roster):
        empty_roster.fill(RosterSlot.QB, make_player(1, Position.QB))
        assert can_accept(empty_roster, Position.QB)

    def test_dedicated_and_superflex_filled(self, empty_roster):
        empty_roster.fill(RosterSlot.QB, make_player(1, Position.QB))
        empty_roster.fill(RosterSlot.SUPERFLEX, make_player(2, Position.QB))
        assert not can_accept(empty_roster, Position.QB)
        assert can_accept(empty_roster, Position.RB)

    def test_eligibility_only_shrinks(self, empty_roster):
        fills = [
            (RosterSlot.WR, make_player(1, Position.WR)),
            (RosterSlot.SUPERFLEX, make_player(2, Position.WR)),
            (RosterSlot.RB, make_player(3, Position.RB)),
            (RosterSlot.QB, make_player(4, Position.QB)),
            (RosterSlot.TE, make_player(5, Position.TE)),
        ]
        previous = eligible_categories(empty_roster)
        for slot, player in fills:
            empty_roster.fill(slot, player)
            current = eligible_categories(empty_roster)
            assert current <= previous
            previous = current

    def test_full_roster_accepts_nothing(self, empty_roster):
        for i, slot in enumerate(RosterSlot):
            empty_roster.fill(slot, make_player(i + 1, Position.WR))
        assert empty_roster.is_full
        assert eligible_categories(empty_roster) == set()
        assert available_slots(empty_roster) == []


class TestAssignSlot:
    """Which slot a pick lands in."""

    def test_dedicated_slot_preferred(self, empty_roster):
        assert assign_slot(empty_roster, Position.TE) == RosterSlot.TE

    def test_falls_back_to_superflex(self, empty_roster):
        empty_roster.fill(RosterSlot.TE, make_player(1, Position.TE))
        assert assign_slot(empty_roster, Position.TE) == RosterSlot.SUPERFLEX

    def test_none_when_nothing_open(self, empty_roster):
        empty_roster.fill(RosterSlot.TE, make_player(1, Position.TE))
        empty_roster.fill(RosterSlot.SUPERFLEX, make_player(2, Position.QB))
        assert assign_slot(empty_roster, Position.TE) is None

    def test_fill_occupied_slot_raises(self, empty_roster):
        empty_roster.fill(RosterSlot.RB, make_player(1, Position.RB))
        with pytest.raises(ValueError):
            empty_roster.fill(RosterSlot.RB, make_player(2, Position.RB))

    def test_available_slots_in_slot_order(self, empty_roster):
        empty_roster.fill(RosterSlot.RB, make_player(1, Position.RB))
        assert available_slots(empty_roster) == [
            RosterSlot.QB,
            RosterSlot.WR,
            RosterSlot.TE,
            RosterSlot.SUPERFLEX,
        ]


class TestEligiblePlayers:

    def test_filters_and_keeps_order(self):
        roster = Roster(
            team_index=2,
            qb=make_player(50, Position.QB),
            superflex=make_player(51, Position.QB),
        )
        pool = [
            make_player(3, Position.WR),
            make_player(1, Position.QB),
            make_player(2, Position.RB),
        ]
        assert [p.player_id for p in eligible_players(roster, pool)] == ["p3", "p2"]

    def test_roster_round_trips_through_dict(self):
        roster = Roster(team_index=1, rb=make_player(7, Position.RB))
        restored = Roster.from_dict(roster.to_dict())
        assert restored == roster
        assert restored.team_name == "Team 2"
