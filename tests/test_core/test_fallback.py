"""Tests for fallback picks and advisor proposal validation."""

import pytest

from conftest import make_player
from snakedraft.core.draft import (
    best_eligible_player,
    build_fallback_reasoning,
    validate_advice,
)
from snakedraft.core.enums import Position, RosterSlot
from snakedraft.core.errors import DraftExhaustionError
from snakedraft.core.models import Roster


@pytest.fixture
def no_qb_roster():
    """QB and SUPERFLEX taken, so no more QBs."""
    return Roster(
        team_index=0,
        qb=make_player(90, Position.QB, player_id="own-qb"),
        superflex=make_player(91, Position.QB, player_id="own-sf"),
    )


@pytest.fixture
def board():
    return [
        make_player(1, Position.QB),
        make_player(2, Position.WR, name="Ja'Marr Chase"),
        make_player(3, Position.RB),
    ]


class TestBestEligiblePlayer:

    def test_best_rank_overall(self, empty_roster, board):
        assert best_eligible_player(empty_roster, reversed(board)).player_id == "p1"

    def test_skips_positions_without_slot(self, no_qb_roster, board):
        assert best_eligible_player(no_qb_roster, board).player_id == "p2"

    def test_exhaustion(self, no_qb_roster):
        with pytest.raises(DraftExhaustionError):
            best_eligible_player(no_qb_roster, [make_player(1, Position.QB)])

    def test_full_roster(self, board):
        roster = Roster(team_index=0)
        for i, slot in enumerate(RosterSlot):
            roster.fill(slot, make_player(100 + i, Position.TE))
        with pytest.raises(DraftExhaustionError):
            best_eligible_player(roster, board)


class TestValidateAdvice:

    def test_id_match(self, empty_roster, board):
        result = validate_advice("p3", "", board, empty_roster)
        assert result.player.player_id == "p3"
        assert result.match_type == "id"

    def test_name_match_ignores_case(self, empty_roster, board):
        result = validate_advice("unknown", "  ja'marr CHASE ", board, empty_roster)
        assert result.player.player_id == "p2"
        assert result.match_type == "name"

    def test_unknown_player(self, empty_roster, board):
        assert validate_advice("nope", "Nobody", board, empty_roster) is None

    def test_player_without_slot(self, no_qb_roster, board):
        assert validate_advice("p1", "", board, no_qb_roster) is None


class TestFallbackReasoning:

    def test_mentions_player_and_rank(self, board):
        text = build_fallback_reasoning(board[1])
        assert "Ja'Marr Chase" in text
        assert "Rank 2" in text

    def test_appends_error_context(self, board):
        text = build_fallback_reasoning(board[0], "(Advisor timed out.)")
        assert text.endswith("(Advisor timed out.)")
