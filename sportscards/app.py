"""
Application wiring.

Builds one set of shared collaborators (notifier, card events, auth
session, profiles) and the controllers that use them. Nothing here is
global: every SportsCardsApp owns its own instances.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from sportscards.config import Settings
from sportscards.config import settings as default_settings
from sportscards.db.database import create_engine_for, create_session_factory
from sportscards.db.store import SqlDocumentStore
from sportscards.services.auth_session import AuthSession
from sportscards.services.card_events import CardEvents
from sportscards.services.card_form import CardFormController
from sportscards.services.collaborators import DocumentStore, IdentityService, ImageHost
from sportscards.services.collection_view import CollectionViewController
from sportscards.services.image_host import ImgbbImageHost
from sportscards.services.notifications import NotificationCenter
from sportscards.services.profile import ProfileService

logger = logging.getLogger(__name__)


@dataclass
class SportsCardsApp:
    """The collaborators and controllers of one running app."""

    store: DocumentStore
    image_host: ImageHost
    notifier: NotificationCenter
    events: CardEvents
    profiles: ProfileService
    auth: AuthSession
    collection: CollectionViewController
    form_factory: Callable[[], CardFormController] = field(repr=False)

    def new_card_form(self) -> CardFormController:
        """A fresh form (Add Card page or an Edit dialog) sharing this app's collaborators."""
        return self.form_factory()


def _store_for(config: Settings) -> DocumentStore:
    if config is default_settings:
        return SqlDocumentStore.from_default_engine()

    engine = create_engine_for(config.database_url, echo=config.debug)
    return SqlDocumentStore(create_session_factory(engine))


def _image_host_for(config: Settings) -> ImageHost:
    return ImgbbImageHost(
        api_key=config.imgbb_api_key,
        api_url=config.imgbb_api_url,
        timeout=config.image_upload_timeout,
    )


def build_app(
    identity: IdentityService,
    store: DocumentStore | None = None,
    image_host: ImageHost | None = None,
    settings: Settings | None = None,
) -> SportsCardsApp:
    """
    Wire the app around an identity service.

    Args:
        identity: Sign-in provider
        store: Document store (defaults to the SQL store on database_url)
        image_host: Image host (defaults to ImgBB with the configured key)
        settings: Configuration (defaults to the environment settings)
    """
    config = settings or default_settings

    store = store if store is not None else _store_for(config)
    image_host = image_host if image_host is not None else _image_host_for(config)

    notifier = NotificationCenter(ttl_seconds=config.notification_ttl_seconds)
    events = CardEvents()
    profiles = ProfileService(store)
    auth = AuthSession(identity, notifier, profiles)
    collection = CollectionViewController(store, auth, notifier, events)

    def new_form() -> CardFormController:
        form = CardFormController(store, image_host, auth, notifier, events)
        form.init_draft()
        return form

    logger.info("Built %s", config.app_name)
    return SportsCardsApp(
        store=store,
        image_host=image_host,
        notifier=notifier,
        events=events,
        profiles=profiles,
        auth=auth,
        collection=collection,
        form_factory=new_form,
    )
