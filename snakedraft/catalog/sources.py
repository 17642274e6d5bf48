"""
Player catalog sources.

A source produces the ranked pool a draft starts from. The Sleeper source
fetches the public NFL player dump and keeps the fantasy-relevant top of it.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from snakedraft.catalog.byes import bye_week_for
from snakedraft.core.enums import Position
from snakedraft.core.models import Player

logger = logging.getLogger(__name__)


# Sleeper's rank for unranked players
UNRANKED_SEARCH_RANK = 999999
MAX_YEARS_EXP = 15
DEFAULT_AGE = 25
VALID_POSITIONS = frozenset(p.value for p in Position)

# Sleeper ids that pass every filter but are phantom or undraftable entries.
# Add ids here as they are spotted.
SLEEPER_BLOCKLIST: frozenset[str] = frozenset()


class CatalogError(Exception):
    """The catalog could not be fetched or was empty."""
    pass


class CatalogSource(ABC):
    """Produces the initial ranked player pool."""

    name: str = "catalog"

    @abstractmethod
    async def fetch_players(self, limit: int) -> list[Player]:
        """Return up to `limit` players sorted by rank."""


class StaticCatalogSource(CatalogSource):
    """A fixed player list. Used offline and in tests."""

    name = "static"

    def __init__(self, players: list[Player]):
        self.players = list(players)

    async def fetch_players(self, limit: int) -> list[Player]:
        if not self.players:
            raise CatalogError("Static catalog is empty")
        return sorted(self.players, key=lambda p: p.rank)[:limit]


def is_draftable(record: dict, blocklist: frozenset[str] = SLEEPER_BLOCKLIST) -> bool:
    """Whether a raw Sleeper record belongs in a fantasy pool."""
    if record.get("position") not in VALID_POSITIONS:
        return False
    if not record.get("active"):
        return False
    status = record.get("status")
    if status and status != "Active":
        return False
    search_rank = record.get("search_rank")
    if not search_rank or search_rank == UNRANKED_SEARCH_RANK:
        return False
    if not record.get("team"):
        return False
    years_exp = record.get("years_exp")
    if years_exp is not None and years_exp > MAX_YEARS_EXP:
        return False
    if str(record.get("player_id", "")) in blocklist:
        return False
    return True


def player_from_sleeper(record: dict) -> Player:
    """Map a filtered Sleeper record to a Player."""
    team = record.get("team") or "FA"
    name = record.get("full_name") or (
        f"{record.get('first_name', '')} {record.get('last_name', '')}".strip()
    )
    return Player(
        player_id=str(record["player_id"]),
        name=name,
        position=Position(record["position"]),
        team=team,
        rank=int(record["search_rank"]),
        age=record.get("age") or DEFAULT_AGE,
        bye_week=bye_week_for(team),
    )


class SleeperCatalogSource(CatalogSource):
    """
    Catalog backed by the Sleeper players endpoint.

    Usage:
        source = SleeperCatalogSource(url)
        players = await source.fetch_players(150)
    """

    name = "sleeper"

    def __init__(
        self,
        url: str,
        timeout: float = 20.0,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        blocklist: frozenset[str] = SLEEPER_BLOCKLIST,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            url: Players endpoint
            timeout: Request timeout in seconds
            max_retries: Attempts for transient errors (timeouts, 5xx)
            retry_delay: Base delay between retries (exponential backoff)
            blocklist: Player ids to always exclude
            transport: Optional httpx transport (tests inject a mock)
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.blocklist = blocklist
        self._transport = transport

    async def _fetch_raw(self) -> dict:
        last_error: Optional[Exception] = None

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        ) as client:
            for attempt in range(self.max_retries):
                delay = self.retry_delay * (2 ** attempt)
                try:
                    response = await client.get(self.url)
                except httpx.TimeoutException:
                    logger.warning(f"Sleeper request timed out (attempt {attempt + 1})")
                    last_error = CatalogError("Sleeper request timed out")
                    await asyncio.sleep(delay)
                    continue
                except httpx.RequestError as e:
                    logger.warning(f"Sleeper request error: {e} (attempt {attempt + 1})")
                    last_error = CatalogError(f"Sleeper request error: {e}")
                    await asyncio.sleep(delay)
                    continue

                if response.status_code == 200:
                    data = response.json()
                    if not isinstance(data, dict):
                        raise CatalogError("Unexpected Sleeper response shape")
                    return data

                if response.status_code >= 500:
                    logger.warning(f"Sleeper server error {response.status_code}, retrying")
                    last_error = CatalogError(f"Sleeper API error: {response.status_code}")
                    await asyncio.sleep(delay)
                    continue

                raise CatalogError(
                    f"Sleeper API error: {response.status_code} {response.reason_phrase}"
                )

        raise last_error or CatalogError("Sleeper fetch failed after all retries")

    async def fetch_players(self, limit: int) -> list[Player]:
        raw = await self._fetch_raw()
        records = [r for r in raw.values() if isinstance(r, dict) and is_draftable(r, self.blocklist)]
        records.sort(key=lambda r: r["search_rank"])
        players = [player_from_sleeper(r) for r in records[:limit]]

        if not players:
            raise CatalogError("No players fetched from Sleeper API")

        logger.info(f"Fetched {len(players)} players from Sleeper ({len(raw)} raw records)")
        return players
