"""Write-once async cache shared by the SDK services."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolveOnceCache(Generic[T]):
    """
    In-memory cache whose entries are fetched at most once.

    Concurrent first-time lookups of the same key share a single in-flight
    task. The first successful value is stored and never replaced; failed
    lookups are not stored, so the next caller tries again.
    """

    def __init__(self):
        self._values: Dict[str, T] = {}
        self._pending: Dict[str, "asyncio.Task[T]"] = {}

    def get(self, key: str) -> Optional[T]:
        """Get a resolved value without triggering a lookup."""
        return self._values.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached value for ``key``, fetching it if needed.

        Args:
            key: Cache key
            fetch: Zero-argument coroutine function producing the value

        Returns:
            The cached or freshly fetched value

        Raises:
            Whatever ``fetch`` raises; the failure is not cached.
        """
        if key in self._values:
            logger.debug(f"Cache hit: {key}")
            return self._values[key]

        task = self._pending.get(key)
        if task is None or _failed(task):
            task = asyncio.ensure_future(fetch())
            self._pending[key] = task
            task.add_done_callback(lambda t, k=key: self._settle(k, t))

        # Shielded so one cancelled caller does not cancel the shared lookup
        value = await asyncio.shield(task)
        return self._values.setdefault(key, value)

    def _settle(self, key: str, task: "asyncio.Task[Any]") -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        if not _failed(task):
            self._values.setdefault(key, task.result())


def _failed(task: "asyncio.Task[Any]") -> bool:
    return task.done() and (task.cancelled() or task.exception() is not None)
