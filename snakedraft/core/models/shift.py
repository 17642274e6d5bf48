"""Strategy shift (deviation) and audit records."""

import time
from dataclasses import dataclass, field
from typing import Optional

from snakedraft.core.enums import Position, ShiftCategory, ShiftSeverity


@dataclass(frozen=True)
class ShiftDetection:
    """Result of an archetype rule that fired."""
    trigger: str
    category: ShiftCategory
    severity: ShiftSeverity


@dataclass(frozen=True)
class StrategyShift:
    """Persisted record of a pick that deviated from its archetype."""
    pick_number: int
    team_index: int
    persona: str
    trigger: str
    reasoning: str
    player_picked: str
    position: Position
    category: ShiftCategory
    severity: ShiftSeverity

    @property
    def is_major(self) -> bool:
        return self.severity == ShiftSeverity.MAJOR

    def to_dict(self) -> dict:
        return {
            "pick_number": self.pick_number,
            "team_index": self.team_index,
            "persona": self.persona,
            "trigger": self.trigger,
            "reasoning": self.reasoning,
            "player_picked": self.player_picked,
            "position": self.position.value,
            "category": self.category.value,
            "severity": self.severity.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StrategyShift":
        return cls(
            pick_number=data["pick_number"],
            team_index=data["team_index"],
            persona=data["persona"],
            trigger=data["trigger"],
            reasoning=data.get("reasoning", ""),
            player_picked=data["player_picked"],
            position=Position(data["position"]),
            category=ShiftCategory(data["category"]),
            severity=ShiftSeverity(data["severity"]),
        )


# Rationale text kept in the audit trail
MAX_SUMMARY_LENGTH = 500


@dataclass
class ReasoningSummary:
    """Audit copy of why a pick was made and what the board looked like."""
    pick_number: int
    team_index: int
    persona: str
    advisor: str
    player_id: str
    player_name: str
    position: Position
    summary: str
    board_summary: str = ""
    confidence: float = 1.0
    used_fallback: bool = False
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        self.summary = self.summary[:MAX_SUMMARY_LENGTH]

    def to_dict(self) -> dict:
        return {
            "pick_number": self.pick_number,
            "team_index": self.team_index,
            "persona": self.persona,
            "advisor": self.advisor,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "position": self.position.value,
            "summary": self.summary,
            "board_summary": self.board_summary,
            "confidence": self.confidence,
            "used_fallback": self.used_fallback,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReasoningSummary":
        return cls(
            pick_number=data["pick_number"],
            team_index=data["team_index"],
            persona=data["persona"],
            advisor=data.get("advisor", "unknown"),
            player_id=data["player_id"],
            player_name=data["player_name"],
            position=Position(data["position"]),
            summary=data.get("summary", ""),
            board_summary=data.get("board_summary", ""),
            confidence=data.get("confidence", 1.0),
            used_fallback=data.get("used_fallback", False),
            timestamp=data.get("timestamp", 0.0),
        )


@dataclass
class TeamShiftSummary:
    """Per-team rollup of detected shifts."""
    team_index: int
    total_shifts: int = 0
    last3_team_picks_shift_count: int = 0
    major_shift_count: int = 0
    top_category: Optional[ShiftCategory] = None

    def to_dict(self) -> dict:
        return {
            "team_index": self.team_index,
            "total_shifts": self.total_shifts,
            "last3_team_picks_shift_count": self.last3_team_picks_shift_count,
            "major_shift_count": self.major_shift_count,
            "top_category": self.top_category.value if self.top_category else None,
        }
