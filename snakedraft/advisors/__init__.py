"""Pick advisors."""

from snakedraft.advisors.base import (
    CANDIDATE_LIMIT,
    Advice,
    Advisor,
    AdvisorError,
    AdvisorRequest,
)
from snakedraft.advisors.heuristic import (
    ARCHETYPE_PREFERENCES,
    ArchetypeAdvisor,
    BestAvailableAdvisor,
    Preference,
)
from snakedraft.advisors.registry import AdvisorRegistry, default_registry

__all__ = [
    "ARCHETYPE_PREFERENCES",
    "Advice",
    "Advisor",
    "AdvisorError",
    "AdvisorRegistry",
    "AdvisorRequest",
    "ArchetypeAdvisor",
    "BestAvailableAdvisor",
    "CANDIDATE_LIMIT",
    "Preference",
    "default_registry",
]
