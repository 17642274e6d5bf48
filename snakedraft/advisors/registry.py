"""Archetype -> advisor lookup."""

import logging
from typing import Optional

from snakedraft.advisors.base import Advisor
from snakedraft.advisors.heuristic import ArchetypeAdvisor, BestAvailableAdvisor
from snakedraft.core.enums import Archetype

logger = logging.getLogger(__name__)


class AdvisorRegistry:
    """
    Maps archetype names to advisors.

    Archetypes without a registered advisor get the default.
    """

    def __init__(self, default: Optional[Advisor] = None):
        self.default = default or BestAvailableAdvisor()
        self._advisors: dict[str, Advisor] = {}

    def register(self, archetype: str, advisor: Advisor) -> None:
        self._advisors[archetype] = advisor

    def unregister(self, archetype: str) -> None:
        self._advisors.pop(archetype, None)

    def get(self, archetype: Optional[str]) -> Advisor:
        return self._advisors.get(archetype or "", self.default)

    def __contains__(self, archetype: str) -> bool:
        return archetype in self._advisors


def default_registry() -> AdvisorRegistry:
    """A registry with an archetype advisor for every drafting archetype."""
    registry = AdvisorRegistry()
    for archetype in Archetype:
        if archetype is Archetype.HUMAN:
            continue
        registry.register(archetype.value, ArchetypeAdvisor(archetype))
    return registry
