"""
SportsCards services.

Controllers for the card form and the collection view, the collaborator
interfaces they depend on, and the adapters and helpers around them.
"""

from sportscards.services.auth_session import AuthSession
from sportscards.services.card_events import CardEvent, CardEvents, CardEventType
from sportscards.services.card_form import (
    CardFormController,
    FormMode,
    FormState,
    apply_manufacturer_to_draft,
    apply_sport_to_draft,
)
from sportscards.services.collaborators import (
    DocumentStore,
    IdentityService,
    ImageHost,
    StoredDocument,
)
from sportscards.services.image_host import ImgbbImageHost
from sportscards.services.image_processing import ImageAttachment, prepare_image
from sportscards.services.notifications import (
    Notification,
    NotificationCenter,
    NotificationLevel,
)
from sportscards.services.profile import ProfileService
from sportscards.services.reference_data import (
    get_all_manufacturers,
    get_manufacturers_for_sport,
    get_sets_for_manufacturer,
)

# collection_view is not re-exported: it depends on sportscards.filtering,
# which itself imports reference_data from this package

__all__ = [
    "AuthSession",
    "CardEvent",
    "CardEventType",
    "CardEvents",
    "CardFormController",
    "DocumentStore",
    "FormMode",
    "FormState",
    "IdentityService",
    "ImageAttachment",
    "ImageHost",
    "ImgbbImageHost",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "ProfileService",
    "StoredDocument",
    "apply_manufacturer_to_draft",
    "apply_sport_to_draft",
    "get_all_manufacturers",
    "get_manufacturers_for_sport",
    "get_sets_for_manufacturer",
    "prepare_image",
]
