"""
Archetype assignment for draft slots.

Duplicates are allowed (several teams may share a strategy). Every draft
gets exactly two reactive drafters so board trends always have someone
responding to them; the rest are drawn by weight.
"""

import logging
import random
from typing import Optional

from snakedraft.core.enums import Archetype
from snakedraft.core.models import PersonaAssignment

logger = logging.getLogger(__name__)


# Relative selection weights for non-reactive slots
PERSONA_POOL: dict[Archetype, float] = {
    Archetype.BALANCED: 2.0,
    Archetype.BOLD: 1.0,
    Archetype.ZERO_RB: 1.0,
    Archetype.QB_FIRST: 1.0,
    Archetype.STUD_RB: 1.0,
    Archetype.VALUE_HUNTER: 1.5,
    Archetype.STACK_BUILDER: 1.0,
    Archetype.TE_PREMIUM: 0.5,
    Archetype.YOUTH_MOVEMENT: 1.0,
    Archetype.CONTRARIAN: 0.5,
    Archetype.RISK_AVERSE: 1.5,
}

REACTIVE_SLOTS = 2


def weighted_persona(rng: random.Random) -> Archetype:
    """Draw one archetype from the weighted pool."""
    archetypes = list(PERSONA_POOL)
    weights = [PERSONA_POOL[a] for a in archetypes]
    return rng.choices(archetypes, weights=weights, k=1)[0]


def assign_personas(
    num_teams: int,
    human_team_index: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[PersonaAssignment]:
    """
    Assign an archetype to every team slot.

    Args:
        num_teams: Number of teams in the draft
        human_team_index: Slot controlled by a person, if any
        rng: Random source (pass a seeded one for reproducible drafts)

    Returns:
        One assignment per team, ordered by team index. The human slot
        gets the "human" sentinel.
    """
    rng = rng or random.Random()

    drafter_slots = [i for i in range(num_teams) if i != human_team_index]
    rng.shuffle(drafter_slots)
    reactive = set(drafter_slots[:REACTIVE_SLOTS])

    assignments = []
    for team_index in range(num_teams):
        if team_index == human_team_index:
            persona = Archetype.HUMAN
        elif team_index in reactive:
            persona = Archetype.REACTIVE
        else:
            persona = weighted_persona(rng)
        assignments.append(PersonaAssignment(team_index=team_index, persona=persona.value))

    logger.info(
        "Assigned personas: "
        + ", ".join(f"T{a.team_index + 1}={a.persona}" for a in assignments)
    )
    return assignments
