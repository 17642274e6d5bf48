"""Board signal analysis and strategy shift detection."""

from snakedraft.core.analysis.board import (
    BoardAnalysis,
    NO_SIGNAL_SUMMARY,
    PositionRun,
    ScarcityAlert,
    ValueDrop,
    analyze_board_state,
    detect_position_runs,
    detect_scarcity,
    detect_value_drops,
)
from snakedraft.core.analysis.shifts import (
    SHIFT_RULES,
    ShiftContext,
    build_shift_context,
    detect_persona_shift,
)
from snakedraft.core.analysis.summary import summarize_shifts

__all__ = [
    "BoardAnalysis",
    "NO_SIGNAL_SUMMARY",
    "PositionRun",
    "SHIFT_RULES",
    "ScarcityAlert",
    "ShiftContext",
    "ValueDrop",
    "analyze_board_state",
    "build_shift_context",
    "detect_persona_shift",
    "detect_position_runs",
    "detect_scarcity",
    "detect_value_drops",
    "summarize_shifts",
]
