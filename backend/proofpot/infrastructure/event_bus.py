"""Event Bus — in-process, post-commit delivery of domain events to subscribers.

Invariants:
    - publish() is only ever called after the originating write has committed
    - Each subscriber receives each event at most once per publish() call
    - Subscribers run in registration order
    - A failing subscriber is logged and skipped; it never undoes the committed write
      and never prevents delivery to the remaining subscribers

Design Decisions:
    - Subscribers may be sync or async callables: sync handlers (metrics, tests)
      need no event loop plumbing
    - history kept (bounded deque): lets tests and the readiness probe observe
      delivery without a live broker
"""

import inspect
import logging
from collections import deque
from typing import Any, Callable

from proofpot.core.events import DomainEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[DomainEvent], Any]


class EventBus:
    """Fan-out of committed domain events to registered subscribers."""

    def __init__(self, history_size: int = 1000):
        self._subscribers: list[Subscriber] = []
        self.history: deque[DomainEvent] = deque(maxlen=history_size)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register `subscriber`. Returns a callable that unsubscribes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    async def publish(self, events: tuple[DomainEvent, ...]) -> None:
        for event in events:
            self.history.append(event)
            for subscriber in list(self._subscribers):
                await self._deliver(subscriber, event)

    async def _deliver(self, subscriber: Subscriber, event: DomainEvent) -> None:
        try:
            result = subscriber(event)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(
                f"Event subscriber failed for {event.name}: {e}",
                exc_info=True,
            )
