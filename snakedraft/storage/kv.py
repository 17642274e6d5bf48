"""
Key-value storage for draft state.

Values are plain JSON-style structures (dicts, lists, scalars) addressed
by namespace + key. The store promises two things beyond get/set:
- get_many reads several keys as one consistent view
- set_many writes several keys as one batch, optionally guarded by a
  precondition evaluated atomically with the write
"""

import asyncio
import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional


StoreKey = tuple[str, str]


@dataclass(frozen=True)
class StoreResult:
    """Result of a read. `exists` is False when the key was never written."""
    exists: bool
    data: Any = None


MISSING = StoreResult(exists=False)


@dataclass(frozen=True)
class Precondition:
    """
    A check against the current stored value of one key.

    `check` receives the StoreResult for (namespace, key) and returns True
    if the write may proceed.
    """
    namespace: str
    key: str
    check: Callable[[StoreResult], bool]
    description: str = ""


class PreconditionFailed(Exception):
    """Raised by set_many when its precondition does not hold."""

    def __init__(self, precondition: Precondition):
        detail = precondition.description or f"{precondition.namespace}/{precondition.key}"
        super().__init__(f"Precondition failed: {detail}")
        self.precondition = precondition


class KeyValueStore(ABC):
    """Abstract namespace + key value store."""

    @abstractmethod
    async def get(self, namespace: str, key: str) -> StoreResult:
        """Read one value."""

    @abstractmethod
    async def set(self, namespace: str, key: str, value: Any) -> None:
        """Write one value."""

    @abstractmethod
    async def delete(self, namespace: str, key: str) -> None:
        """Remove a value if present."""

    @abstractmethod
    async def keys(self, namespace: str, prefix: str = "") -> list[str]:
        """List keys in a namespace, optionally filtered by prefix."""

    @abstractmethod
    async def get_many(self, keys: Iterable[StoreKey]) -> dict[StoreKey, StoreResult]:
        """Read several keys as one consistent view."""

    @abstractmethod
    async def set_many(
        self,
        items: dict[StoreKey, Any],
        precondition: Optional[Precondition] = None,
    ) -> None:
        """
        Write several keys as one batch.

        Raises PreconditionFailed (writing nothing) if the precondition
        does not hold at write time.
        """


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store. A lock serializes batch operations; it
    is only held for the dict operations themselves.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    def _read(self, namespace: str, key: str) -> StoreResult:
        bucket = self._data.get(namespace, {})
        if key not in bucket:
            return MISSING
        return StoreResult(exists=True, data=copy.deepcopy(bucket[key]))

    def _write(self, namespace: str, key: str, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = copy.deepcopy(value)

    async def get(self, namespace: str, key: str) -> StoreResult:
        async with self._lock:
            return self._read(namespace, key)

    async def set(self, namespace: str, key: str, value: Any) -> None:
        async with self._lock:
            self._write(namespace, key, value)

    async def delete(self, namespace: str, key: str) -> None:
        async with self._lock:
            self._data.get(namespace, {}).pop(key, None)

    async def keys(self, namespace: str, prefix: str = "") -> list[str]:
        async with self._lock:
            return sorted(k for k in self._data.get(namespace, {}) if k.startswith(prefix))

    async def get_many(self, keys: Iterable[StoreKey]) -> dict[StoreKey, StoreResult]:
        async with self._lock:
            return {(ns, key): self._read(ns, key) for ns, key in keys}

    async def set_many(
        self,
        items: dict[StoreKey, Any],
        precondition: Optional[Precondition] = None,
    ) -> None:
        async with self._lock:
            if precondition is not None:
                current = self._read(precondition.namespace, precondition.key)
                if not precondition.check(current):
                    raise PreconditionFailed(precondition)
            for (ns, key), value in items.items():
                self._write(ns, key, value)

    def clear(self) -> None:
        """Remove everything."""
        self._data.clear()
