"""
User profile documents.

Profiles live at users/{uid} and hold the display name shown in the
header. Writes merge, so a profile can be updated before it exists.
"""

import logging
from datetime import datetime, timezone

from sportscards.config import USERS_COLLECTION
from sportscards.models.failure import DraftValidationError, KnownError
from sportscards.models.profile import UserProfile
from sportscards.services.collaborators import DocumentStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def email_local_part(email: str) -> str:
    """Name fallback: the part of the email before "@"."""
    return email.split("@", 1)[0]


class ProfileService:
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_profile(self, uid: str) -> UserProfile | None:
        document = await self._store.get_by_id(USERS_COLLECTION, uid)
        if document is None:
            return None
        return UserProfile.from_document(uid, document.data)

    async def display_name(self, uid: str, email: str) -> str:
        """
        Name to greet the user with.

        Falls back to the email local part when there is no profile, the
        profile has no name, or the profile cannot be read.
        """
        try:
            profile = await self.get_profile(uid)
        except KnownError as error:
            logger.warning("Could not load profile %s: %s", uid, error.message)
            return email_local_part(email)

        if profile is None or not profile.name:
            return email_local_part(email)
        return profile.name

    async def create_profile(self, uid: str, name: str, email: str) -> UserProfile:
        now = _now()
        await self._store.set_with_merge(
            USERS_COLLECTION,
            uid,
            {
                "name": name,
                "email": email,
                "createdAt": now.isoformat(),
                "updatedAt": now.isoformat(),
            },
        )
        logger.info("Created profile %s", uid)
        return UserProfile(uid=uid, name=name, email=email, created_at=now, updated_at=now)

    async def update_name(self, uid: str, email: str, name: str) -> str:
        """
        Change the display name.

        Raises:
            DraftValidationError: If the name is blank
            ExternalServiceError: If the store write fails
        """
        name = name.strip()
        if not name:
            raise DraftValidationError({"name": "required"})

        await self._store.set_with_merge(
            USERS_COLLECTION,
            uid,
            {"name": name, "email": email, "updatedAt": _now().isoformat()},
        )
        logger.info("Updated profile name for %s", uid)
        return name
