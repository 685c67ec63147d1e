"""
In-process change feed for content tables.
Subscribers receive every committed INSERT/UPDATE/DELETE for the table they watch.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from portfolio.schemas import ChangeEvent

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class Subscription:
    """A standing subscription to one table's changes."""

    def __init__(self, table: str, max_queue_size: int = DEFAULT_QUEUE_SIZE):
        self.table = table
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=max_queue_size)
        self.dropped = 0

    def offer(self, event: ChangeEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            # Subscribers refetch on any event, so the queued ones already cover this change
            self.dropped += 1

    async def get(self) -> ChangeEvent:
        return await self.queue.get()


class ChangeFeed:
    """
    Publish/subscribe broker for table change events.

    Usage:
        async with changefeed.subscribe("gallery_items") as subscription:
            event = await subscription.get()
    """

    def __init__(self, max_queue_size: int = DEFAULT_QUEUE_SIZE):
        self.max_queue_size = max_queue_size
        self._subscriptions: List[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @asynccontextmanager
    async def subscribe(self, table: str) -> AsyncIterator[Subscription]:
        subscription = Subscription(table, self.max_queue_size)
        self._subscriptions.append(subscription)
        logger.info(f"Change feed subscription opened for {table} ({self.subscriber_count} active)")
        try:
            yield subscription
        finally:
            self._subscriptions.remove(subscription)
            logger.info(f"Change feed subscription closed for {table} ({self.subscriber_count} active)")

    def publish(self, event: ChangeEvent) -> int:
        """
        Deliver an event to every subscriber of its table.

        Returns:
            int: Number of subscriptions the event was offered to
        """
        delivered = 0
        for subscription in list(self._subscriptions):
            if subscription.table == event.table:
                subscription.offer(event)
                delivered += 1
        logger.debug(f"Published {event.event_type} on {event.table} to {delivered} subscriber(s)")
        return delivered


def format_sse(event: ChangeEvent) -> str:
    """Serialize an event as a Server-Sent Events message."""
    return f"data: {event.model_dump_json()}\n\n"


# Global broker instance
changefeed = ChangeFeed()
