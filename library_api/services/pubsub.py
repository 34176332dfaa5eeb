"""
Notification Bus

In-process publish/subscribe used by GraphQL subscriptions.

Delivery model:
- Fan-out: every active subscriber of a topic receives every event
- Push-based and synchronous relative to publish(): the payload is queued
  for each subscriber before publish() returns
- Non-durable: events published while nobody is subscribed are dropped,
  and there is no replay for late subscribers

The bus is created once by the application factory and stored on
app.state.notification_bus; resolvers reach it through the GraphQL context.

Usage:
    bus = NotificationBus()

    async for book in bus.subscribe(Topic.BOOK_ADDED):
        ...

    bus.publish(Topic.BOOK_ADDED, book)
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class Topic(StrEnum):
    """Topics that can be published and subscribed to."""

    BOOK_ADDED = "book.added"


# Queued to end a subscription when the bus closes
_CLOSED = object()


class NotificationBus:
    """
    Fans published payloads out to per-subscriber asyncio queues.

    publish() must be called from the event loop thread that runs the
    subscribers. Sync Strawberry resolvers run on that thread.
    """

    def __init__(self):
        # Map of topic -> queues of active subscribers
        self._subscribers: dict[str, set[asyncio.Queue]] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, topic: Topic, payload: Any) -> int:
        """
        Deliver a payload to every current subscriber of a topic.

        Args:
            topic: Topic to publish to
            payload: Object handed to each subscriber as-is

        Returns:
            Number of subscribers the payload was queued for
        """
        queues = list(self._subscribers.get(topic, ()))
        for queue in queues:
            queue.put_nowait(payload)

        logger.debug(f"Published to '{topic}': {len(queues)} subscribers")
        return len(queues)

    async def subscribe(self, topic: Topic) -> AsyncIterator[Any]:
        """
        Yield every payload published to a topic after registration.

        The subscriber is registered when iteration starts and removed when
        the consumer stops iterating or the bus is closed.
        """
        if self._closed:
            return

        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.setdefault(topic, set()).add(queue)
        logger.info(
            f"Subscriber joined '{topic}' "
            f"(total={self.subscriber_count(topic)})"
        )

        try:
            while True:
                payload = await queue.get()
                if payload is _CLOSED:
                    return
                yield payload
        finally:
            self._remove(topic, queue)

    def _remove(self, topic: str, queue: asyncio.Queue) -> None:
        queues = self._subscribers.get(topic)
        if queues is None:
            return

        queues.discard(queue)
        if not queues:
            del self._subscribers[topic]

        logger.info(
            f"Subscriber left '{topic}' "
            f"(total={self.subscriber_count(topic)})"
        )

    def subscriber_count(self, topic: Topic) -> int:
        """Get the number of active subscribers of a topic."""
        return len(self._subscribers.get(topic, ()))

    def get_stats(self) -> dict[str, int]:
        """Get subscriber counts per topic."""
        return {
            str(topic): len(queues)
            for topic, queues in self._subscribers.items()
        }

    def close(self) -> None:
        """End every active subscription and refuse new ones."""
        self._closed = True
        for queues in list(self._subscribers.values()):
            for queue in list(queues):
                queue.put_nowait(_CLOSED)
