"""EventBus — ordered, isolated, post-commit delivery."""

import logging
from datetime import datetime, timezone

from proofpot.core.domain_types import HashKey, Identity
from proofpot.core.events import AdministratorTransferred, RecipeRegistered
from proofpot.infrastructure.event_bus import EventBus

ALICE = Identity("0x" + "aa" * 20)
BOB = Identity("0x" + "bb" * 20)
REGISTERED = RecipeRegistered(
    HashKey(bytes(32)), ALICE, datetime(2026, 1, 1, tzinfo=timezone.utc),
)
TRANSFERRED = AdministratorTransferred(ALICE, BOB)


async def test_sync_and_async_subscribers_receive_events():
    bus = EventBus()
    sync_seen, async_seen = [], []

    async def async_subscriber(event):
        async_seen.append(event)

    bus.subscribe(sync_seen.append)
    bus.subscribe(async_subscriber)
    await bus.publish((REGISTERED, TRANSFERRED))

    assert sync_seen == [REGISTERED, TRANSFERRED]
    assert async_seen == [REGISTERED, TRANSFERRED]
    assert list(bus.history) == [REGISTERED, TRANSFERRED]


async def test_failing_subscriber_is_isolated(caplog):
    bus = EventBus()
    seen = []

    def explode(event):
        raise RuntimeError("boom")

    bus.subscribe(explode)
    bus.subscribe(seen.append)
    with caplog.at_level(logging.ERROR):
        await bus.publish((REGISTERED,))

    assert seen == [REGISTERED]
    assert "RecipeRegistered" in caplog.text


async def test_unsubscribe_stops_delivery():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    await bus.publish((TRANSFERRED,))
    assert seen == []


async def test_history_is_bounded():
    bus = EventBus(history_size=2)
    await bus.publish((REGISTERED, TRANSFERRED, REGISTERED))
    assert list(bus.history) == [TRANSFERRED, REGISTERED]


def test_event_payloads_are_serializable():
    assert REGISTERED.to_payload() == {
        "event": "RecipeRegistered",
        "content_hash": "0x" + "00" * 32,
        "creator": ALICE,
        "timestamp": "2026-01-01T00:00:00+00:00",
    }
    assert TRANSFERRED.to_payload()["new_administrator"] == BOB
