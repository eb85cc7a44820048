"""
Interfaces of the services this package delegates to.

Identity, document storage and image hosting are provided from outside.
Implementations raise KnownError subclasses (ExternalServiceError,
RecordNotFoundError) for failures they understand.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

AuthStateCallback = Callable[[str | None], None]
Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class StoredDocument:
    """A document returned by the store: its id and a copy of its fields."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


class IdentityService(Protocol):
    """Hosted authentication."""

    async def register(self, email: str, password: str, name: str) -> str:
        """Create an account and sign in. Returns the new user id."""
        ...

    async def sign_in(self, email: str, password: str) -> str:
        """Start a session. Returns the user id."""
        ...

    async def sign_out(self) -> None: ...

    def current_user(self) -> str | None: ...

    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        """Call callback with the user id (or None) on every session transition."""
        ...


class DocumentStore(Protocol):
    """Hosted schemaless document database."""

    async def create(self, collection: str, record: dict[str, Any]) -> str: ...

    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None:
        """Merge fields into a document. Raises RecordNotFoundError if missing."""
        ...

    async def delete(self, collection: str, document_id: str) -> bool:
        """Delete a document. Returns False if it was already gone."""
        ...

    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]: ...

    async def get_by_id(self, collection: str, document_id: str) -> StoredDocument | None: ...

    async def set_with_merge(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None: ...


class ImageHost(Protocol):
    """Hosted image upload."""

    async def upload(self, image: bytes, filename: str) -> str:
        """Upload image bytes. Returns the public URL."""
        ...
