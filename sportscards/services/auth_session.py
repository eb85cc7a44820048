"""
Signed-in session state.

Wraps the identity service: tracks the current user id, fans out auth
state transitions and reports sign-in/registration failures to the user.
"""

import logging
from collections.abc import Callable

from sportscards.models.failure import (
    AuthRequiredError,
    ExternalServiceError,
    FailureKind,
    KnownError,
)
from sportscards.services.collaborators import IdentityService, Unsubscribe
from sportscards.services.notifications import NotificationCenter
from sportscards.services.profile import ProfileService

logger = logging.getLogger(__name__)

AuthListener = Callable[[str | None], None]


def _identity_error(exc: Exception) -> KnownError:
    if isinstance(exc, KnownError):
        return exc
    return ExternalServiceError(
        kind=FailureKind.AUTH_FAILED,
        service="identity",
        message=str(exc) or "Authentication failed.",
        detail=type(exc).__name__,
    )


class AuthSession:
    """Current-user tracking on top of an IdentityService."""

    def __init__(
        self,
        identity: IdentityService,
        notifier: NotificationCenter,
        profiles: ProfileService | None = None,
    ):
        self._identity = identity
        self._notifier = notifier
        self._profiles = profiles
        self._user_id: str | None = identity.current_user()
        self._listeners: list[AuthListener] = []
        self._identity_unsubscribe: Unsubscribe | None = None

    @property
    def current_user_id(self) -> str | None:
        return self._user_id

    @property
    def is_signed_in(self) -> bool:
        return self._user_id is not None

    def require_user(self) -> str:
        """
        Get the signed-in user id.

        Raises:
            AuthRequiredError: If nobody is signed in
        """
        if self._user_id is None:
            raise AuthRequiredError()
        return self._user_id

    def start(self) -> None:
        """Begin following identity service session transitions."""
        if self._identity_unsubscribe is None:
            self._identity_unsubscribe = self._identity.on_auth_state_change(self._handle_change)

    def stop(self) -> None:
        if self._identity_unsubscribe is not None:
            self._identity_unsubscribe()
            self._identity_unsubscribe = None

    def on_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register a listener for user id changes. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _handle_change(self, user_id: str | None) -> None:
        if user_id == self._user_id:
            return
        logger.info("Auth state changed: %s", "signed in" if user_id else "signed out")
        self._user_id = user_id
        for listener in list(self._listeners):
            listener(user_id)

    async def register(self, email: str, password: str, name: str) -> str | None:
        """
        Create an account, sign in and create the profile document.

        Returns the new user id, or None if registration failed (reported).
        """
        try:
            user_id = await self._identity.register(email, password, name)
        except Exception as exc:
            error = _identity_error(exc)
            logger.warning("Registration failed for %s: %s", email, error.message)
            self._notifier.report(error, prefix="Error")
            return None

        self._handle_change(user_id)

        if self._profiles is not None:
            try:
                await self._profiles.create_profile(user_id, name, email)
            except KnownError as error:
                # Account exists; the display name falls back to the email
                self._notifier.report(error, prefix="Error saving profile")
        return user_id

    async def sign_in(self, email: str, password: str) -> str | None:
        """Start a session. Returns the user id, or None if sign-in failed (reported)."""
        try:
            user_id = await self._identity.sign_in(email, password)
        except Exception as exc:
            error = _identity_error(exc)
            logger.warning("Sign-in failed for %s: %s", email, error.message)
            self._notifier.report(error, prefix="Error")
            return None

        self._handle_change(user_id)
        return user_id

    async def sign_out(self) -> bool:
        """End the session. Returns False if the identity service failed (reported)."""
        try:
            await self._identity.sign_out()
        except Exception as exc:
            error = _identity_error(exc)
            self._notifier.report(error, prefix="Error signing out")
            return False

        self._handle_change(None)
        return True
