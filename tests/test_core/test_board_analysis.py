"""Tests for board signal analysis."""

from conftest import make_pick, make_player, make_pool
from snakedraft.config import DraftConfig
from snakedraft.core.analysis import (
    NO_SIGNAL_SUMMARY,
    analyze_board_state,
    detect_position_runs,
    detect_scarcity,
    detect_value_drops,
)
from snakedraft.core.enums import Position

QB, RB, WR, TE = Position.QB, Position.RB, Position.WR, Position.TE


def history(*positions):
    """Picks 1..n at the given positions, drafted from outside the pool."""
    return [
        make_pick(i, make_player(1000 + i, pos))
        for i, pos in enumerate(positions, start=1)
    ]


def counted_pool(counts: dict[Position, int], start_rank: int = 1):
    players = []
    rank = start_rank
    for position, count in counts.items():
        for _ in range(count):
            players.append(make_player(rank, position))
            rank += 1
    return players


class TestPositionRuns:

    def test_run_detected(self):
        runs = detect_position_runs(history(RB, RB, RB, WR))
        assert [(r.position, r.count, r.window) for r in runs] == [(RB, 3, 4)]

    def test_only_recent_window_counts(self):
        picks = history(QB, QB, QB, RB, WR, TE, RB, WR, TE, RB)
        runs = detect_position_runs(picks)
        assert [r.position for r in runs] == [RB]
        assert runs[0].window == 8

    def test_runs_listed_in_first_appearance_order(self):
        runs = detect_position_runs(history(WR, RB, WR, RB, WR, RB))
        assert [r.position for r in runs] == [WR, RB]

    def test_below_minimum_is_not_a_run(self):
        assert detect_position_runs(history(QB, QB, RB, WR, TE)) == []

    def test_no_picks(self):
        assert detect_position_runs([]) == []


class TestValueDrops:

    def test_drops_sorted_biggest_first(self):
        available = [
            make_player(14, WR),
            make_player(5, RB),
            make_player(11, QB),
            make_player(13, TE),  # fallen 7, under threshold
        ]
        drops = detect_value_drops(available, pick_number=20)
        assert [d.adp_diff for d in drops] == [15, 9]
        assert [d.player.player_id for d in drops] == ["p5", "p11"]

    def test_threshold_is_inclusive(self):
        drops = detect_value_drops([make_player(12, WR)], pick_number=20)
        assert [d.adp_diff for d in drops] == [8]

    def test_ties_keep_pool_order(self):
        available = [
            make_player(10, WR, player_id="b"),
            make_player(10, RB, player_id="a"),
        ]
        drops = detect_value_drops(available, pick_number=20)
        assert [d.player.player_id for d in drops] == ["b", "a"]


class TestScarcity:

    def test_includes_empty_positions(self):
        available = counted_pool({QB: 6, RB: 6, WR: 2})
        scarcity = detect_scarcity(available)
        assert [(s.position, s.remaining) for s in scarcity] == [(TE, 0), (WR, 2)]

    def test_ties_keep_position_order(self):
        available = counted_pool({QB: 3, RB: 6, WR: 6, TE: 3})
        assert [s.position for s in detect_scarcity(available)] == [QB, TE]

    def test_healthy_pool(self, player_pool):
        assert detect_scarcity(player_pool) == []


class TestAnalyzeBoardState:

    def test_opening_board_has_no_signals(self, player_pool):
        analysis = analyze_board_state([], player_pool, 1)
        assert not analysis.has_signals
        assert analysis.summary == NO_SIGNAL_SUMMARY

    def test_summary_sections_in_order(self):
        available = counted_pool({QB: 6, RB: 6, WR: 6, TE: 2})
        analysis = analyze_board_state(history(RB, RB, RB), available, pick_number=20)
        summary = analysis.summary
        assert summary.startswith("Board Analysis:\n")
        assert summary.index("POSITION RUN") < summary.index("VALUE DROPS")
        assert summary.index("VALUE DROPS") < summary.index("SCARCITY ALERT")
        assert "TE (2 left)" in summary

    def test_summary_names_top_three_drops(self):
        available = [make_player(rank, WR) for rank in (1, 2, 3, 4, 5)]
        analysis = analyze_board_state([], available, pick_number=30)
        assert len(analysis.value_drops) == 5
        for rank in (1, 2, 3):
            assert f"Player {rank} (WR, Rank {rank}, fallen {30 - rank} spots)" in analysis.summary
        assert "Player 4" not in analysis.summary

    def test_analysis_is_repeatable(self):
        pool = make_pool(40)
        picks = history(QB, QB, RB, QB)
        first = analyze_board_state(picks, pool, 25)
        second = analyze_board_state(picks, pool, 25)
        assert first == second

    def test_config_thresholds_apply(self):
        config = DraftConfig(
            catalog_source="static",
            value_drop_threshold=3,
            position_run_min_count=2,
        )
        analysis = analyze_board_state(
            history(TE, TE), [make_player(7, WR)], pick_number=10, config=config
        )
        assert [r.position for r in analysis.position_runs] == [TE]
        assert [d.adp_diff for d in analysis.value_drops] == [3]

    def test_to_dict_limits_drops(self):
        available = [make_player(rank, WR) for rank in (1, 2, 3, 4, 5)]
        data = analyze_board_state([], available, pick_number=30).to_dict(drop_limit=2)
        assert len(data["value_drops"]) == 2
        assert data["value_drops"][0]["player"]["player_id"] == "p1"
