import asyncio
import io
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sportscards.db.store import SqlDocumentStore
from sportscards.models.card import CardRecord
from sportscards.models.db import Base
from sportscards.models.failure import (
    ExternalServiceError,
    FailureKind,
    RecordNotFoundError,
)
from sportscards.services.auth_session import AuthSession
from sportscards.services.card_events import CardEvents
from sportscards.services.collaborators import AuthStateCallback, StoredDocument, Unsubscribe
from sportscards.services.notifications import NotificationCenter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeIdentity:
    """In-memory identity service with scriptable failures."""

    def __init__(self, user_id: str | None = None):
        self.user_id = user_id
        self.accounts: dict[str, tuple[str, str]] = {}
        self.fail_with: Exception | None = None
        self._callbacks: list[AuthStateCallback] = []

    async def register(self, email: str, password: str, name: str) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        uid = f"uid-{len(self.accounts) + 1}"
        self.accounts[email] = (password, uid)
        self.user_id = uid
        return uid

    async def sign_in(self, email: str, password: str) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        stored = self.accounts.get(email)
        if stored is None or stored[0] != password:
            raise ValueError("Invalid email or password")
        self.user_id = stored[1]
        return stored[1]

    async def sign_out(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.user_id = None

    def current_user(self) -> str | None:
        return self.user_id

    def on_auth_state_change(self, callback: AuthStateCallback) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, user_id: str | None) -> None:
        self.user_id = user_id
        for callback in list(self._callbacks):
            callback(user_id)


class FakeImageHost:
    """Records uploads; can fail or block until released."""

    def __init__(self) -> None:
        self.uploads: list[tuple[bytes, str]] = []
        self.fail_with: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def upload(self, image: bytes, filename: str) -> str:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        self.uploads.append((image, filename))
        return f"https://img.example.com/{len(self.uploads)}/{filename}"


class FakeDocumentStore:
    """
    Dict-backed document store that records every call.

    failing: operation names ("create", "update", "delete", "query", ...)
        that raise a storage error
    query_gates/delete_gates: events awaited (first in, first out) before
        the next query/delete completes
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failing: set[str] = set()
        self.query_gates: list[asyncio.Event] = []
        self.delete_gates: list[asyncio.Event] = []
        self._next_id = 0

    def _check(self, operation: str, collection: str) -> None:
        self.calls.append((operation, collection))
        if operation in self.failing:
            raise ExternalServiceError(
                kind=FailureKind.STORAGE_ERROR,
                service="storage",
                message=f"Could not {operation} the record.",
            )

    def seed(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        self.collections.setdefault(collection, {})[document_id] = dict(data)

    def docs(self, collection: str) -> dict[str, dict[str, Any]]:
        return self.collections.get(collection, {})

    async def create(self, collection: str, record: dict[str, Any]) -> str:
        self._check("create", collection)
        self._next_id += 1
        document_id = f"doc-{self._next_id}"
        self.seed(collection, document_id, record)
        return document_id

    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None:
        self._check("update", collection)
        existing = self.docs(collection).get(document_id)
        if existing is None:
            raise RecordNotFoundError(collection, document_id)
        existing.update(partial)

    async def delete(self, collection: str, document_id: str) -> bool:
        self._check("delete", collection)
        if self.delete_gates:
            await self.delete_gates.pop(0).wait()
        return self.docs(collection).pop(document_id, None) is not None

    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]:
        self._check("query", collection)
        matches = [
            StoredDocument(id=doc_id, data=dict(data))
            for doc_id, data in self.docs(collection).items()
            if all(data.get(k) == v for k, v in (filters or {}).items())
        ]
        if self.query_gates:
            await self.query_gates.pop(0).wait()
        return matches

    async def get_by_id(self, collection: str, document_id: str) -> StoredDocument | None:
        self._check("get_by_id", collection)
        data = self.docs(collection).get(document_id)
        return StoredDocument(id=document_id, data=dict(data)) if data is not None else None

    async def set_with_merge(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        self._check("set_with_merge", collection)
        self.collections.setdefault(collection, {}).setdefault(document_id, {}).update(data)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier(clock: FakeClock) -> NotificationCenter:
    return NotificationCenter(ttl_seconds=3.0, clock=clock)


@pytest.fixture
def identity() -> FakeIdentity:
    """Identity service with user "user-1" already signed in."""
    return FakeIdentity(user_id="user-1")


@pytest.fixture
def auth(identity: FakeIdentity, notifier: NotificationCenter) -> AuthSession:
    return AuthSession(identity, notifier)


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def image_host() -> FakeImageHost:
    return FakeImageHost()


@pytest.fixture
def events() -> CardEvents:
    return CardEvents()


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine shared by every session."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def sql_store(session_factory: async_sessionmaker[AsyncSession]) -> SqlDocumentStore:
    return SqlDocumentStore(session_factory)


@pytest.fixture
def make_card() -> Callable[..., CardRecord]:
    """Factory for CardRecords with sensible defaults."""

    def _make(**overrides: Any) -> CardRecord:
        values: dict[str, Any] = {
            "id": "card-1",
            "player": "Ken Griffey Jr.",
            "user_id": "user-1",
            "year": 1989,
            "sport": "Baseball",
            "manufacturer": "Upper Deck",
            "set_name": "Base",
            "card_number": "1",
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return CardRecord(**values)

    return _make


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for encoded test images."""

    def _make(width: int = 40, height: int = 60, fmt: str = "PNG") -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color=(200, 30, 30)).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make
