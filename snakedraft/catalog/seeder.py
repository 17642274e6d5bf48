"""
Single-flight catalog seeding.

Seeding a draft's pool is idempotent: concurrent callers for the same
draft share one in-flight fetch, and once the pool is written it is
never fetched again. A failed fetch is not cached so a later call can
retry.
"""

import asyncio
import logging

from snakedraft.catalog.sources import CatalogError, CatalogSource
from snakedraft.core.models import Player
from snakedraft.storage import KeyValueStore
from snakedraft.storage.keys import available_key

logger = logging.getLogger(__name__)


class CatalogSeeder:
    """Writes each draft's initial pool exactly once."""

    def __init__(self, store: KeyValueStore, source: CatalogSource, size: int = 150):
        self.store = store
        self.source = source
        self.size = size
        self._in_flight: dict[str, asyncio.Task] = {}
        self.fetch_count = 0

    async def ensure_seeded(self, draft_id: str) -> list[Player]:
        """
        Return the draft's pool, fetching and writing it if needed.

        Raises:
            CatalogError: the source failed or returned nothing
        """
        existing = await self.store.get(*available_key(draft_id))
        if existing.exists:
            return [Player.from_dict(p) for p in existing.data]

        task = self._in_flight.get(draft_id)
        if task is None:
            task = asyncio.ensure_future(self._seed(draft_id))
            self._in_flight[draft_id] = task
            task.add_done_callback(lambda t: self._forget(draft_id, t))

        # Shield so one cancelled waiter doesn't cancel the shared fetch
        return await asyncio.shield(task)

    async def _seed(self, draft_id: str) -> list[Player]:
        self.fetch_count += 1
        logger.info(f"Seeding catalog for draft {draft_id} from {self.source.name}")
        try:
            players = await self.source.fetch_players(self.size)
        except CatalogError:
            logger.error(f"Catalog seeding failed for draft {draft_id}")
            raise
        except Exception as e:
            logger.error(f"Catalog seeding failed for draft {draft_id}: {e}")
            raise CatalogError(f"Catalog source {self.source.name} failed: {e}") from e

        # Another writer may have seeded while we fetched
        existing = await self.store.get(*available_key(draft_id))
        if existing.exists:
            return [Player.from_dict(p) for p in existing.data]

        await self.store.set(*available_key(draft_id), [p.to_dict() for p in players])
        logger.info(f"Seeded {len(players)} players for draft {draft_id}")
        return players

    def is_seeding(self, draft_id: str) -> bool:
        return draft_id in self._in_flight

    def _forget(self, draft_id: str, task: asyncio.Task) -> None:
        if self._in_flight.get(draft_id) is task:
            del self._in_flight[draft_id]
