"""
Notification Bus Tests

Tests for the in-process publish/subscribe bus:
- Fan-out to every subscriber
- No delivery to late subscribers
- Subscriber cleanup and bus shutdown
"""

import asyncio

import pytest

from library_api.services.pubsub import NotificationBus, Topic


async def next_item(subscription):
    """Await the next payload of a subscription iterator."""
    return await subscription.__anext__()


async def wait_for_subscribers(bus: NotificationBus, count: int) -> None:
    """Let pending subscriber tasks run until `count` are registered."""
    for _ in range(100):
        if bus.subscriber_count(Topic.BOOK_ADDED) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} subscribers")


class TestTopic:
    """Tests for the Topic enum."""

    def test_book_added_topic(self):
        assert Topic.BOOK_ADDED == "book.added"


class TestNotificationBus:
    """Tests for NotificationBus."""

    def test_initial_state(self):
        """Test a new bus has no subscribers."""
        bus = NotificationBus()

        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0
        assert bus.get_stats() == {}
        assert bus.closed is False

    def test_publish_without_subscribers_is_dropped(self):
        """Test publishing with nobody listening reaches no one."""
        bus = NotificationBus()

        assert bus.publish(Topic.BOOK_ADDED, {"title": "Lost"}) == 0

    @pytest.mark.asyncio
    async def test_subscriber_receives_published_payload(self):
        """Test one subscriber receives one event."""
        bus = NotificationBus()
        subscription = bus.subscribe(Topic.BOOK_ADDED)
        pending = asyncio.create_task(next_item(subscription))
        await wait_for_subscribers(bus, 1)

        assert bus.publish(Topic.BOOK_ADDED, "Clean Code") == 1
        assert await pending == "Clean Code"

        await subscription.aclose()
        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0

    @pytest.mark.asyncio
    async def test_fan_out_to_every_subscriber(self):
        """Test every subscriber receives every event."""
        bus = NotificationBus()
        first = bus.subscribe(Topic.BOOK_ADDED)
        second = bus.subscribe(Topic.BOOK_ADDED)
        first_pending = asyncio.create_task(next_item(first))
        second_pending = asyncio.create_task(next_item(second))
        await wait_for_subscribers(bus, 2)

        assert bus.get_stats() == {"book.added": 2}
        assert bus.publish(Topic.BOOK_ADDED, "Clean Code") == 2
        assert await first_pending == "Clean Code"
        assert await second_pending == "Clean Code"

        await first.aclose()
        await second.aclose()

    @pytest.mark.asyncio
    async def test_events_arrive_in_publish_order(self):
        """Test a subscriber sees events in the order they were published."""
        bus = NotificationBus()
        subscription = bus.subscribe(Topic.BOOK_ADDED)
        pending = asyncio.create_task(next_item(subscription))
        await wait_for_subscribers(bus, 1)

        bus.publish(Topic.BOOK_ADDED, 1)
        bus.publish(Topic.BOOK_ADDED, 2)

        assert await pending == 1
        assert await next_item(subscription) == 2

        await subscription.aclose()

    @pytest.mark.asyncio
    async def test_late_subscriber_misses_earlier_events(self):
        """Test events are not replayed to subscribers that join later."""
        bus = NotificationBus()
        bus.publish(Topic.BOOK_ADDED, "before")

        subscription = bus.subscribe(Topic.BOOK_ADDED)
        pending = asyncio.create_task(next_item(subscription))
        await wait_for_subscribers(bus, 1)
        bus.publish(Topic.BOOK_ADDED, "after")

        assert await pending == "after"

        await subscription.aclose()

    @pytest.mark.asyncio
    async def test_cancelled_subscriber_is_removed(self):
        """Test a cancelled consumer unregisters its queue."""
        bus = NotificationBus()
        subscription = bus.subscribe(Topic.BOOK_ADDED)
        pending = asyncio.create_task(next_item(subscription))
        await wait_for_subscribers(bus, 1)

        pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await pending

        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0
        assert bus.publish(Topic.BOOK_ADDED, "nobody") == 0

    @pytest.mark.asyncio
    async def test_close_ends_subscriptions(self):
        """Test closing the bus ends active and future subscriptions."""
        bus = NotificationBus()
        subscription = bus.subscribe(Topic.BOOK_ADDED)
        pending = asyncio.create_task(next_item(subscription))
        await wait_for_subscribers(bus, 1)

        bus.close()

        with pytest.raises(StopAsyncIteration):
            await pending
        assert bus.subscriber_count(Topic.BOOK_ADDED) == 0

        late = bus.subscribe(Topic.BOOK_ADDED)
        with pytest.raises(StopAsyncIteration):
            await next_item(late)
