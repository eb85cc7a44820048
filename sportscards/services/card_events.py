"""
Card change notifications between the form and the browse view.

One CardEvents instance is created per application and injected into the
controllers that need it. Subscribers hold an unsubscribe callable and
release it when they go away (the browse view does so on unmount).
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from sportscards.models.card import CardRecord

logger = logging.getLogger(__name__)


class CardEventType(str, Enum):
    ADDED = "added"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class CardEvent:
    type: CardEventType
    card: CardRecord


CardEventListener = Callable[[CardEvent], Awaitable[None]]


class CardEvents:
    """Observer for card additions and edits."""

    def __init__(self) -> None:
        self._listeners: list[CardEventListener] = []

    def subscribe(self, listener: CardEventListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def publish(self, event: CardEvent) -> None:
        """
        Deliver an event to every listener subscribed at publish time, in order.

        A failing listener is logged and does not stop later listeners; the
        change being announced has already been stored.
        """
        logger.debug("card %s: %s", event.type.value, event.card.id)
        for listener in list(self._listeners):
            try:
                await listener(event)
            except Exception:
                logger.exception("Card event listener failed for %s", event.card.id)

    async def card_added(self, card: CardRecord) -> None:
        await self.publish(CardEvent(CardEventType.ADDED, card))

    async def card_updated(self, card: CardRecord) -> None:
        await self.publish(CardEvent(CardEventType.UPDATED, card))
