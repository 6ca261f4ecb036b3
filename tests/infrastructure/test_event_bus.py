"""Tests for EventBus infrastructure."""

import pytest

from stratus.domain.events.lifecycle_events import (
    LifecycleActionFailedEvent,
    LifecycleActionSucceededEvent,
)
from stratus.domain.ports.event_bus_port import EventBusPort
from stratus.infrastructure.event_bus import EventBus


class TestEventBus:
    def test_implements_port(self):
        assert isinstance(EventBus(), EventBusPort)

    @pytest.mark.asyncio
    async def test_publish_to_subscriber(self):
        bus = EventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe(LifecycleActionSucceededEvent, handler)

        event = LifecycleActionSucceededEvent(
            aggregate_id="gcp:123", provider="gcp", action="start"
        )
        await bus.publish([event])

        assert len(received) == 1
        assert received[0].aggregate_id == "gcp:123"

    @pytest.mark.asyncio
    async def test_no_subscriber(self):
        bus = EventBus()
        # Should not raise
        await bus.publish([LifecycleActionSucceededEvent(aggregate_id="x")])

    @pytest.mark.asyncio
    async def test_subscription_is_per_type(self):
        bus = EventBus()
        failures = []

        async def handler(event):
            failures.append(event)

        bus.subscribe(LifecycleActionFailedEvent, handler)
        await bus.publish([
            LifecycleActionSucceededEvent(aggregate_id="a"),
            LifecycleActionFailedEvent(aggregate_id="b", reason="denied"),
        ])

        assert [e.aggregate_id for e in failures] == ["b"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(self, caplog):
        bus = EventBus()
        received = []

        async def broken(event):
            raise RuntimeError("handler bug")

        async def healthy(event):
            received.append(event)

        bus.subscribe(LifecycleActionSucceededEvent, broken)
        bus.subscribe(LifecycleActionSucceededEvent, healthy)

        await bus.publish([LifecycleActionSucceededEvent(aggregate_id="a")])

        assert len(received) == 1
        assert "handler bug" in caplog.text
