"""Synthetic player pool generation for offline drafts and tests."""

import random
from typing import Optional

from snakedraft.catalog.byes import BYE_WEEKS
from snakedraft.core.enums import Position
from snakedraft.core.models import Player

# Sample names for generation
FIRST_NAMES = [
    "James", "John", "Michael", "David", "Chris", "Matt", "Josh", "Ryan",
    "Tyler", "Brandon", "Justin", "Marcus", "Antonio", "DeShawn", "Malik",
    "Jamal", "Terrell", "Andre", "Darius", "Lamar", "Patrick", "Tom",
    "Aaron", "Derek", "Russell", "Cam", "Kyler", "Trevor", "Tua",
    "Cooper", "Chase", "Tyreek", "Davante", "Stefon", "CeeDee",
    "Travis", "George", "Mark", "Derrick", "Dalvin", "Alvin", "Nick",
]

LAST_NAMES = [
    "Johnson", "Williams", "Brown", "Jones", "Davis", "Miller", "Wilson",
    "Moore", "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris",
    "Martin", "Thompson", "Robinson", "Clark", "Lewis", "Walker", "Hall",
    "Allen", "Young", "King", "Wright", "Hill", "Scott", "Green", "Adams",
    "Baker", "Nelson", "Carter", "Mitchell", "Murray", "Herbert", "Burrow",
    "Lawrence", "Fields",
]

# Share of a fantasy top-150 at each position
POSITION_WEIGHTS: dict[Position, float] = {
    Position.QB: 0.17,
    Position.RB: 0.30,
    Position.WR: 0.40,
    Position.TE: 0.13,
}

# (min, max) age by position
AGE_RANGES: dict[Position, tuple[int, int]] = {
    Position.QB: (22, 38),
    Position.RB: (21, 30),
    Position.WR: (21, 33),
    Position.TE: (22, 34),
}


def generate_player(
    rank: int,
    position: Optional[Position] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """
    Generate a random player at a rank.

    Args:
        rank: Overall rank (tier is derived from it)
        position: Position to generate (weighted random if None)
        rng: Random source

    Returns:
        Generated Player
    """
    rng = rng or random.Random()
    if position is None:
        positions = list(POSITION_WEIGHTS)
        position = rng.choices(positions, weights=[POSITION_WEIGHTS[p] for p in positions])[0]

    team = rng.choice(sorted(BYE_WEEKS))
    low, high = AGE_RANGES[position]
    return Player(
        player_id=f"gen-{rank}",
        name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        position=position,
        rank=rank,
        team=team,
        age=rng.randint(low, high),
        bye_week=BYE_WEEKS[team],
    )


def generate_pool(size: int = 150, seed: Optional[int] = None) -> list[Player]:
    """
    Generate a ranked pool.

    Every position is guaranteed at least one player in each 20 ranks so
    small drafts never run dry on a position.
    """
    rng = random.Random(seed)
    players = []
    for rank in range(1, size + 1):
        forced = list(Position)[(rank - 1) // 5 % 4] if rank % 5 == 0 else None
        players.append(generate_player(rank, position=forced, rng=rng))
    return players
