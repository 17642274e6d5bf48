"""Player catalog sources and pool seeding."""

from snakedraft.catalog.byes import BYE_WEEKS, DEFAULT_BYE_WEEK, bye_week_for
from snakedraft.catalog.generator import generate_pool
from snakedraft.catalog.seeder import CatalogSeeder
from snakedraft.catalog.sources import (
    CatalogError,
    CatalogSource,
    SleeperCatalogSource,
    StaticCatalogSource,
    is_draftable,
    player_from_sleeper,
)

__all__ = [
    "BYE_WEEKS",
    "CatalogError",
    "CatalogSeeder",
    "CatalogSource",
    "DEFAULT_BYE_WEEK",
    "SleeperCatalogSource",
    "StaticCatalogSource",
    "bye_week_for",
    "generate_pool",
    "is_draftable",
    "player_from_sleeper",
]
