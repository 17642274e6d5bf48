"""
Board Signal Analysis.

Detects three kinds of board dynamics from the pick history and the
remaining pool:
- Position runs: one position dominating recent picks
- Value drops: players still available well past their rank
- Scarcity: positions with few players left

All functions are pure. Analysis is recomputed before every pick and is
never stored as authoritative state.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from snakedraft.config import DraftConfig
from snakedraft.core.enums import ALL_POSITIONS, Position
from snakedraft.core.models import Pick, Player


# Default thresholds (~8 spots is roughly one tier)
POSITION_RUN_WINDOW = 8
POSITION_RUN_MIN_COUNT = 3
VALUE_DROP_THRESHOLD = 8
SCARCITY_THRESHOLD = 5

# Value drops listed in the summary text
SUMMARY_DROP_LIMIT = 3

NO_SIGNAL_SUMMARY = "Board Analysis: No significant trends detected. Draft as planned."


@dataclass(frozen=True)
class PositionRun:
    position: Position
    count: int
    window: int

    def to_dict(self) -> dict:
        return {"position": self.position.value, "count": self.count, "window": self.window}


@dataclass(frozen=True)
class ValueDrop:
    player: Player
    adp_diff: int  # pick number minus rank

    def to_dict(self) -> dict:
        return {"player": self.player.to_dict(), "adp_diff": self.adp_diff}


@dataclass(frozen=True)
class ScarcityAlert:
    position: Position
    remaining: int

    def to_dict(self) -> dict:
        return {"position": self.position.value, "remaining": self.remaining}


@dataclass(frozen=True)
class BoardAnalysis:
    """Snapshot of board signals before a pick."""
    position_runs: tuple[PositionRun, ...] = field(default_factory=tuple)
    value_drops: tuple[ValueDrop, ...] = field(default_factory=tuple)
    scarcity: tuple[ScarcityAlert, ...] = field(default_factory=tuple)
    summary: str = NO_SIGNAL_SUMMARY

    @property
    def has_signals(self) -> bool:
        return bool(self.position_runs or self.value_drops or self.scarcity)

    def to_dict(self, drop_limit: Optional[int] = None) -> dict:
        drops = self.value_drops if drop_limit is None else self.value_drops[:drop_limit]
        return {
            "position_runs": [r.to_dict() for r in self.position_runs],
            "value_drops": [d.to_dict() for d in drops],
            "scarcity": [s.to_dict() for s in self.scarcity],
            "summary": self.summary,
        }


def detect_position_runs(
    picks: Sequence[Pick],
    window_size: int = POSITION_RUN_WINDOW,
    min_run_count: int = POSITION_RUN_MIN_COUNT,
) -> list[PositionRun]:
    """
    Detect position runs in recent picks.

    A run is min_run_count or more picks at one position within the last
    window_size picks. Runs are listed in order of first appearance in the
    window.
    """
    if not picks:
        return []

    window = list(picks[-window_size:])
    counts = Counter(pick.position for pick in window)

    return [
        PositionRun(position=position, count=count, window=len(window))
        for position, count in counts.items()
        if count >= min_run_count
    ]


def detect_value_drops(
    available: Sequence[Player],
    pick_number: int,
    threshold: int = VALUE_DROP_THRESHOLD,
) -> list[ValueDrop]:
    """
    Detect players whose rank is well ahead of the current pick.

    A Rank 10 player still on the board at pick 25 has dropped 15 spots.
    Sorted biggest drop first; ties keep pool order.
    """
    drops = [
        ValueDrop(player=player, adp_diff=player.value_at(pick_number))
        for player in available
        if player.value_at(pick_number) >= threshold
    ]
    drops.sort(key=lambda d: d.adp_diff, reverse=True)
    return drops


def detect_scarcity(
    available: Sequence[Player],
    threshold: int = SCARCITY_THRESHOLD,
) -> list[ScarcityAlert]:
    """
    Detect positions that are drying up.

    Every position is counted, including ones with nothing left. Sorted
    most scarce first; ties keep position order.
    """
    counts = Counter(player.position for player in available)
    scarce = [
        ScarcityAlert(position=position, remaining=counts.get(position, 0))
        for position in ALL_POSITIONS
        if counts.get(position, 0) <= threshold
    ]
    scarce.sort(key=lambda s: s.remaining)
    return scarce


def build_summary(
    runs: Sequence[PositionRun],
    drops: Sequence[ValueDrop],
    scarcity: Sequence[ScarcityAlert],
) -> str:
    """Human-readable summary in run, drop, scarcity order."""
    parts = []

    if runs:
        desc = ", ".join(
            f"{r.position.value} ({r.count} of last {r.window} picks)" for r in runs
        )
        parts.append(
            f"POSITION RUN: Teams are rushing to draft {desc}. "
            "Consider whether to join the run or exploit the value elsewhere."
        )

    if drops:
        desc = "; ".join(
            f"{d.player.name} ({d.player.position.value}, Rank {d.player.rank}, "
            f"fallen {d.adp_diff} spots)"
            for d in drops[:SUMMARY_DROP_LIMIT]
        )
        parts.append(
            f"VALUE DROPS: {desc}. "
            "These players have fallen well past their expected draft position."
        )

    if scarcity:
        desc = ", ".join(f"{s.position.value} ({s.remaining} left)" for s in scarcity)
        parts.append(f"SCARCITY ALERT: {desc}. These positions are drying up fast.")

    if not parts:
        return NO_SIGNAL_SUMMARY
    return "Board Analysis:\n" + "\n".join(parts)


def analyze_board_state(
    picks: Sequence[Pick],
    available: Sequence[Player],
    pick_number: int,
    config: Optional[DraftConfig] = None,
) -> BoardAnalysis:
    """Run all detectors and produce a structured result with a summary."""
    if config is None:
        runs = detect_position_runs(picks)
        drops = detect_value_drops(available, pick_number)
        scarcity = detect_scarcity(available)
    else:
        runs = detect_position_runs(
            picks, config.position_run_window, config.position_run_min_count
        )
        drops = detect_value_drops(available, pick_number, config.value_drop_threshold)
        scarcity = detect_scarcity(available, config.scarcity_threshold)

    return BoardAnalysis(
        position_runs=tuple(runs),
        value_drops=tuple(drops),
        scarcity=tuple(scarcity),
        summary=build_summary(runs, drops, scarcity),
    )
