"""
Collection browse controller.

Owns the authoritative in-memory snapshot of the signed-in user's cards
and derives the visible view from it through the filtering engine.

INVARIANTS:
- The snapshot is replaced wholesale by load() and never reordered in place
- Results that arrive after unmount, or after a newer load started, are
  discarded
- Delete is two-phase; one confirmation issues at most one storage delete
- A failed load or delete leaves the snapshot unchanged
"""

import logging
from collections.abc import Callable
from typing import Any

from sportscards.config import CARDS_COLLECTION
from sportscards.filtering.badges import FilterBadge, active_filter_badges
from sportscards.filtering.badges import clear_all_filters as _clear_all_filters
from sportscards.filtering.badges import clear_filter as _clear_filter
from sportscards.filtering.cascade import (
    FilterOptions,
    apply_manufacturer,
    apply_sport,
    resolve_filter_options,
)
from sportscards.filtering.engine import apply_criteria
from sportscards.filtering.summary import CollectionSummary, summarize_collection
from sportscards.models.card import CardRecord
from sportscards.models.criteria import FilterCriteria
from sportscards.models.failure import UNKNOWN_FAILURE_MESSAGE, KnownError
from sportscards.services.auth_session import AuthSession
from sportscards.services.card_events import CardEvent, CardEvents, CardEventType
from sportscards.services.collaborators import DocumentStore
from sportscards.services.notifications import NotificationCenter

logger = logging.getLogger(__name__)


class CollectionViewController:
    """State and actions behind the "View Cards" screen."""

    def __init__(
        self,
        store: DocumentStore,
        auth: AuthSession,
        notifier: NotificationCenter,
        events: CardEvents,
    ):
        self._store = store
        self._auth = auth
        self._notifier = notifier
        self._events = events

        self._cards: list[CardRecord] = []
        self._criteria, self._options = resolve_filter_options(FilterCriteria())
        self._view: list[CardRecord] | None = None

        self._mounted = False
        self._unsubscribe_events: Callable[[], None] | None = None
        self._unsubscribe_auth: Callable[[], None] | None = None
        self._load_generation = 0
        self._loading = False
        self.error: str | None = None

        self._pending_delete: str | None = None
        self._deleting = False

    # --- Lifecycle ---

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Start listening for card events from the form and for sign-out."""
        if self._mounted:
            return
        self._mounted = True
        self._unsubscribe_events = self._events.subscribe(self._on_card_event)
        self._unsubscribe_auth = self._auth.on_change(self._on_auth_change)

    def unmount(self) -> None:
        """Stop listening; in-flight loads will be discarded."""
        self._mounted = False
        if self._unsubscribe_events is not None:
            self._unsubscribe_events()
            self._unsubscribe_events = None
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None

    async def _on_card_event(self, event: CardEvent) -> None:
        if event.type is CardEventType.UPDATED:
            self.apply_patch(event.card)
        else:
            await self.load()

    def _on_auth_change(self, user_id: str | None) -> None:
        if user_id is not None:
            return
        # Drop the previous user's cards and any load still in flight
        self._load_generation += 1
        self._loading = False
        self._cards = []
        self._view = None
        self._pending_delete = None
        self.error = None
        logger.debug("Cleared card snapshot on sign-out")

    # --- Snapshot ---

    @property
    def cards(self) -> tuple[CardRecord, ...]:
        """The full snapshot, read-only."""
        return tuple(self._cards)

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def total_count(self) -> int:
        return len(self._cards)

    async def load(self) -> bool:
        """
        Fetch every card owned by the signed-in user and replace the snapshot.

        Returns True if the snapshot was replaced.
        """
        self._load_generation += 1
        generation = self._load_generation
        self._loading = True

        try:
            user_id = self._auth.require_user()
            documents = await self._store.query(CARDS_COLLECTION, {"userId": user_id})
            cards = [CardRecord.from_document(d.id, d.data) for d in documents]
        except KnownError as error:
            return self._load_failed(generation, error.message)
        except Exception:
            logger.exception("Unexpected failure loading cards")
            return self._load_failed(generation, UNKNOWN_FAILURE_MESSAGE)

        if not self._is_current(generation):
            logger.debug("Discarding stale card load %d", generation)
            return False

        self._cards = cards
        self._view = None
        self._loading = False
        self.error = None
        logger.info("Loaded %d cards for %s", len(self._cards), user_id)
        return True

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._load_generation

    def _load_failed(self, generation: int, message: str) -> bool:
        if not self._is_current(generation):
            return False
        self._loading = False
        self.error = f"Error fetching cards: {message}"
        self._notifier.error(self.error)
        return False

    def apply_patch(self, card: CardRecord) -> bool:
        """
        Replace the card with the same id without reloading.

        Returns False if the card is not in the snapshot.
        """
        for index, existing in enumerate(self._cards):
            if existing.id == card.id:
                cards = list(self._cards)
                cards[index] = card
                self._cards = cards
                self._view = None
                return True
        return False

    # --- Criteria ---

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def filter_options(self) -> FilterOptions:
        return self._options

    def _set_criteria(self, criteria: FilterCriteria, options: FilterOptions) -> None:
        self._criteria = criteria
        self._options = options
        self._view = None

    def set_search_term(self, term: str) -> None:
        self._set_criteria(self._criteria.with_changes(search_term=term), self._options)

    def set_sport(self, sport: str | None) -> None:
        self._set_criteria(*apply_sport(self._criteria, sport))

    def set_manufacturer(self, manufacturer: str | None) -> None:
        self._set_criteria(*apply_manufacturer(self._criteria, manufacturer))

    def update_criteria(self, **changes: Any) -> None:
        """Change any criteria fields; the option cascade always re-runs."""
        self._set_criteria(*resolve_filter_options(self._criteria.with_changes(**changes)))

    def clear_filter(self, key: str) -> None:
        self._set_criteria(*resolve_filter_options(_clear_filter(self._criteria, key)))

    def clear_all_filters(self) -> None:
        self._set_criteria(*resolve_filter_options(_clear_all_filters(self._criteria)))

    @property
    def active_filters(self) -> list[FilterBadge]:
        return active_filter_badges(self._criteria)

    # --- Derived view ---

    @property
    def visible_cards(self) -> list[CardRecord]:
        """Cards to display, filtered and sorted by the current criteria."""
        if self._view is None:
            self._view = apply_criteria(self._cards, self._criteria)
        return list(self._view)

    @property
    def visible_count(self) -> int:
        return len(self.visible_cards)

    @property
    def summary(self) -> CollectionSummary:
        return summarize_collection(self._cards)

    # --- Delete ---

    @property
    def pending_delete(self) -> str | None:
        return self._pending_delete

    def request_delete(self, card_id: str) -> bool:
        """
        Mark a card for deletion; nothing is deleted until confirm_delete().

        Returns False if a delete is already pending or in progress.
        """
        if self._deleting or self._pending_delete is not None:
            return False
        self._pending_delete = card_id
        return True

    def cancel_delete(self) -> None:
        self._pending_delete = None

    async def confirm_delete(self) -> bool:
        """
        Delete the pending card, then reload.

        A card that is already gone counts as deleted. Returns True if the
        card no longer exists in storage.
        """
        card_id = self._pending_delete
        if card_id is None or self._deleting:
            return False

        self._pending_delete = None
        self._deleting = True
        try:
            deleted = await self._store.delete(CARDS_COLLECTION, card_id)
        except KnownError as error:
            self._notifier.report(error, prefix="Error deleting card")
            return False
        except Exception:
            logger.exception("Unexpected failure deleting card %s", card_id)
            self._notifier.error(UNKNOWN_FAILURE_MESSAGE)
            return False
        finally:
            self._deleting = False

        if deleted:
            self._notifier.success("Card deleted successfully!")
        else:
            logger.warning("Card %s was already deleted", card_id)

        if self._mounted:
            await self.load()
        return True
