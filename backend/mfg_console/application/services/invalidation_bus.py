"""Invalidation bus — in-process broadcaster for cache invalidation events."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheInvalidated:
    """A collection's cached records are stale and must be refetched."""

    collection: str
    reason: str = "mutation"
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InvalidationBus:
    """Broadcasts invalidation events to every subscriber.

    Each subscriber gets its own asyncio.Queue. Publishing pushes the event
    to all queues. Subscribers consume events via an async generator.
    Events are signals, not a work queue: nothing waits for subscribers to
    react before the publisher continues.
    """

    def __init__(self, max_queue_size: int = 100) -> None:
        self._max_queue_size = max_queue_size
        self._queues: list[asyncio.Queue[CacheInvalidated | None]] = []

    async def subscribe(self) -> AsyncGenerator[CacheInvalidated, None]:
        """Subscribe to invalidation events.

        The generator unsubscribes automatically when the consumer stops
        iterating or the bus shuts down.
        """
        queue: asyncio.Queue[CacheInvalidated | None] = asyncio.Queue(
            maxsize=self._max_queue_size
        )
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def publish(self, event: CacheInvalidated) -> None:
        """Push an event to every subscriber; slow subscribers are dropped."""
        dead_queues: list[asyncio.Queue[CacheInvalidated | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("Invalidation subscriber queue full — disconnecting")

        for q in dead_queues:
            self._queues.remove(q)
            # Make room for the close marker so the subscriber can exit
            q.get_nowait()
            q.put_nowait(None)

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queue in self._queues:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(None)
        self._queues.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)
