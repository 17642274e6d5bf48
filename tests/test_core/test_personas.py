"""Tests for persona assignment."""

import random

import pytest

from snakedraft.core.enums import Archetype
from snakedraft.core.personas import PERSONA_POOL, REACTIVE_SLOTS, assign_personas


def personas_of(assignments):
    return [a.persona for a in assignments]


class TestAssignPersonas:

    @pytest.mark.parametrize("seed", range(5))
    def test_exactly_two_reactive(self, seed):
        personas = personas_of(assign_personas(8, rng=random.Random(seed)))
        assert personas.count(Archetype.REACTIVE.value) == REACTIVE_SLOTS

    def test_one_assignment_per_team_in_order(self):
        assignments = assign_personas(12, rng=random.Random(3))
        assert [a.team_index for a in assignments] == list(range(12))

    def test_human_slot(self):
        assignments = assign_personas(8, human_team_index=4, rng=random.Random(1))
        assert assignments[4].persona == Archetype.HUMAN.value
        assert assignments[4].is_human
        assert personas_of(assignments).count(Archetype.REACTIVE.value) == 2
        assert personas_of(assignments).count(Archetype.HUMAN.value) == 1

    def test_two_team_draft_with_human(self):
        personas = personas_of(assign_personas(2, human_team_index=0, rng=random.Random(0)))
        assert personas == [Archetype.HUMAN.value, Archetype.REACTIVE.value]

    def test_other_slots_come_from_pool(self):
        allowed = {a.value for a in PERSONA_POOL}
        for persona in personas_of(assign_personas(16, rng=random.Random(9))):
            if persona != Archetype.REACTIVE.value:
                assert persona in allowed

    def test_seeded_assignment_is_reproducible(self):
        first = assign_personas(10, 2, rng=random.Random(11))
        second = assign_personas(10, 2, rng=random.Random(11))
        assert first == second
