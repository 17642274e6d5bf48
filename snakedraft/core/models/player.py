"""Draftable player (candidate item) model."""

from dataclasses import dataclass

from snakedraft.core.enums import Position


# Tier buckets by rank: (max rank inclusive, tier)
TIER_BOUNDARIES = [
    (30, 1),
    (60, 2),
    (90, 3),
    (120, 4),
]
DEEP_TIER = 5


def tier_for_rank(rank: int) -> int:
    """
    Bucket a rank into a tier.

    Tier 1 = top 30, Tier 2 = 31-60, Tier 3 = 61-90, Tier 4 = 91-120, Tier 5 = 121+
    """
    for max_rank, tier in TIER_BOUNDARIES:
        if rank <= max_rank:
            return tier
    return DEEP_TIER


@dataclass(frozen=True)
class Player:
    """
    A draftable player.

    Players move from the available pool to exactly one roster and
    never return. Lower rank is better.
    """
    player_id: str
    name: str
    position: Position
    rank: int
    team: str = "FA"
    tier: int = 0  # 0 = derive from rank
    age: int = 25
    bye_week: int = 8

    def __post_init__(self) -> None:
        if not isinstance(self.position, Position):
            raise ValueError(f"Unknown position: {self.position!r}")
        if self.tier == 0:
            object.__setattr__(self, "tier", tier_for_rank(self.rank))

    def value_at(self, pick_number: int) -> int:
        """Spots this player has fallen past their rank (negative = reach)."""
        return pick_number - self.rank

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "position": self.position.value,
            "team": self.team,
            "rank": self.rank,
            "tier": self.tier,
            "age": self.age,
            "bye_week": self.bye_week,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Player":
        return cls(
            player_id=data["player_id"],
            name=data["name"],
            position=Position(data["position"]),
            team=data.get("team", "FA"),
            rank=data["rank"],
            tier=data.get("tier", 0),
            age=data.get("age", 25),
            bye_week=data.get("bye_week", 8),
        )
