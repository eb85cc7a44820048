"""
Add/Edit card form controller.

Owns one draft from creation to submit:
- Dependent fields cascade through pure transitions (sport resets
  manufacturer and set; manufacturer resets set)
- Images are validated and shrunk when attached, uploaded at submit
- Submit is all-or-nothing: validation, then upload, then one record write

INVARIANTS:
- A failed validation or upload never reaches the document store
- A failed store write leaves the draft intact for a retry
- At most one submit runs at a time
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

from sportscards.config import CARDS_COLLECTION
from sportscards.models.card import GRADED_NO, CardRecord
from sportscards.models.draft import DRAFT_FIELDS, CardDraft, ParsedCard, validate_draft
from sportscards.models.failure import UNKNOWN_FAILURE_MESSAGE, KnownError
from sportscards.services.auth_session import AuthSession
from sportscards.services.card_events import CardEvents
from sportscards.services.collaborators import DocumentStore, ImageHost
from sportscards.services.image_processing import ImageAttachment, prepare_image
from sportscards.services.notifications import NotificationCenter
from sportscards.services.reference_data import (
    get_manufacturers_for_sport,
    get_sets_for_manufacturer,
)

logger = logging.getLogger(__name__)


class FormMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


@dataclass(frozen=True, slots=True)
class FormState:
    """A draft together with the dropdown options that match it."""

    draft: CardDraft
    manufacturer_options: tuple[str, ...] = ()
    set_options: tuple[str, ...] = ()


def _manufacturer_options(sport: str) -> tuple[str, ...]:
    return tuple(get_manufacturers_for_sport(sport)) if sport else ()


def _set_options(manufacturer: str, sport: str) -> tuple[str, ...]:
    return tuple(get_sets_for_manufacturer(manufacturer, sport)) if manufacturer else ()


def form_state_for(draft: CardDraft) -> FormState:
    """Options for a draft as-is (used when seeding, nothing is reset)."""
    return FormState(
        draft=draft,
        manufacturer_options=_manufacturer_options(draft.sport),
        set_options=_set_options(draft.manufacturer, draft.sport),
    )


def apply_sport_to_draft(draft: CardDraft, sport: str) -> FormState:
    """Select a sport: manufacturer and set are cleared, manufacturers reloaded."""
    draft = replace(draft, sport=sport, manufacturer="", set_name="")
    return FormState(draft=draft, manufacturer_options=_manufacturer_options(sport))


def apply_manufacturer_to_draft(draft: CardDraft, manufacturer: str) -> FormState:
    """Select a manufacturer: set is cleared, sets reloaded for (manufacturer, sport)."""
    draft = replace(draft, manufacturer=manufacturer, set_name="")
    return FormState(
        draft=draft,
        manufacturer_options=_manufacturer_options(draft.sport),
        set_options=_set_options(manufacturer, draft.sport),
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CardFormController:
    """State and actions behind the Add Card form and the Edit Card dialog."""

    def __init__(
        self,
        store: DocumentStore,
        image_host: ImageHost,
        auth: AuthSession,
        notifier: NotificationCenter,
        events: CardEvents,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._image_host = image_host
        self._auth = auth
        self._notifier = notifier
        self._events = events
        self._clock = clock

        self._state = FormState(draft=CardDraft())
        self._editing: CardRecord | None = None
        self._pending_image: ImageAttachment | None = None
        self._submitting = False
        self._closed = False

    # --- State ---

    @property
    def mode(self) -> FormMode:
        return FormMode.EDIT if self._editing is not None else FormMode.ADD

    @property
    def draft(self) -> CardDraft:
        return self._state.draft

    @property
    def manufacturer_options(self) -> tuple[str, ...]:
        return self._state.manufacturer_options

    @property
    def set_options(self) -> tuple[str, ...]:
        return self._state.set_options

    @property
    def pending_image(self) -> ImageAttachment | None:
        return self._pending_image

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def is_closed(self) -> bool:
        return self._closed

    # --- Editing ---

    def init_draft(self, existing: CardRecord | None = None) -> None:
        """Start an empty draft, or seed one from an existing card for editing."""
        draft = CardDraft.from_record(existing) if existing is not None else CardDraft()
        self._state = form_state_for(draft)
        self._editing = existing
        self._pending_image = None
        self._closed = False

    def set_field(self, name: str, value: str) -> None:
        """
        Update one draft field, cascading dependent fields.

        Raises:
            ValueError: If name is not a draft field
        """
        if name not in DRAFT_FIELDS:
            msg = f"Unknown card field: {name}"
            raise ValueError(msg)

        draft = self._state.draft
        if name == "sport":
            self._state = apply_sport_to_draft(draft, value)
        elif name == "manufacturer":
            self._state = apply_manufacturer_to_draft(draft, value)
        elif name == "graded" and value == GRADED_NO:
            draft = replace(draft, graded=value, grading_company="", grade_number="")
            self._state = replace(self._state, draft=draft)
        else:
            self._state = replace(self._state, draft=replace(draft, **{name: value}))

    def attach_image(self, filename: str, content_type: str, data: bytes) -> bool:
        """
        Validate and shrink a selected image.

        Rejections are reported and leave the current image untouched.
        Returns True if the image was accepted.
        """
        try:
            attachment = prepare_image(filename, content_type, data)
        except KnownError as error:
            logger.warning("Rejected image %s: %s", filename, error.message)
            self._notifier.report(error)
            return False

        self._pending_image = attachment
        return True

    def remove_image(self) -> None:
        """Drop the selected image and any image already on the draft."""
        self._pending_image = None
        self._state = replace(self._state, draft=replace(self._state.draft, image_url=""))

    def close(self) -> None:
        """Close the form. Work still in flight will not touch form state."""
        self._closed = True

    # --- Submit ---

    async def submit(self) -> CardRecord | None:
        """
        Validate, upload the image if any, then create or update the card.

        Returns the saved record, or None if the submit was rejected or
        failed (the reason is reported as a notification).
        """
        if self._submitting:
            logger.debug("Ignoring submit while another is in flight")
            return None

        action = "updating" if self.mode is FormMode.EDIT else "adding"
        try:
            parsed = validate_draft(self._state.draft)
            user_id = self._auth.require_user()
        except KnownError as error:
            logger.warning("Card form rejected: %s", error.message)
            self._notifier.report(error)
            return None

        self._submitting = True
        try:
            if self._pending_image is not None:
                url = await self._image_host.upload(
                    self._pending_image.data, self._pending_image.filename
                )
                # Keep the hosted URL so a retry after a failed write does not upload again
                self._pending_image = None
                self._state = replace(
                    self._state, draft=replace(self._state.draft, image_url=url)
                )
                parsed = replace(parsed, image_url=url)

            record = await self._save(parsed, user_id)
        except KnownError as error:
            self._notifier.report(error, prefix=f"Error {action} card")
            return None
        except Exception:
            logger.exception("Unexpected failure %s card", action)
            self._notifier.error(UNKNOWN_FAILURE_MESSAGE)
            return None
        finally:
            self._submitting = False

        if self.mode is FormMode.EDIT:
            self._notifier.success("Card updated successfully!")
            await self._events.card_updated(record)
        else:
            self._notifier.success("Card added successfully!")
            await self._events.card_added(record)

        if not self._closed:
            if self.mode is FormMode.EDIT:
                self.close()
            else:
                self.init_draft()
        return record

    async def _save(self, parsed: ParsedCard, user_id: str) -> CardRecord:
        now = self._clock().isoformat()
        fields = parsed.to_fields()

        if self._editing is None:
            document = {**fields, "userId": user_id, "createdAt": now}
            card_id = await self._store.create(CARDS_COLLECTION, document)
            logger.info("Added card %s for %s", card_id, user_id)
            return CardRecord.from_document(card_id, document)

        card_id = self._editing.id
        if card_id is None:
            msg = "Cannot update a card that was never saved"
            raise ValueError(msg)

        partial = {**fields, "updatedAt": now}
        await self._store.update(CARDS_COLLECTION, card_id, partial)
        logger.info("Updated card %s", card_id)
        return CardRecord.from_document(card_id, {**self._editing.to_document(), **partial})
