"""Tests for the SQLAlchemy-backed document store."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sportscards.db.store import SqlDocumentStore
from sportscards.models.db import Base
from sportscards.models.failure import ExternalServiceError, FailureKind, RecordNotFoundError


class TestSqlDocumentStore:
    async def test_create_and_get(self, sql_store: SqlDocumentStore) -> None:
        document_id = await sql_store.create("cards", {"player": "A", "userId": "u1"})

        stored = await sql_store.get_by_id("cards", document_id)

        assert stored is not None
        assert stored.id == document_id
        assert stored.data == {"player": "A", "userId": "u1"}

    async def test_query_by_owner(self, sql_store: SqlDocumentStore) -> None:
        """Each user only sees their own cards."""
        await sql_store.create("cards", {"player": "A", "userId": "u1"})
        await sql_store.create("cards", {"player": "B", "userId": "u2"})

        documents = await sql_store.query("cards", {"userId": "u1"})

        assert [d.data["player"] for d in documents] == ["A"]

    async def test_update_merges(self, sql_store: SqlDocumentStore) -> None:
        document_id = await sql_store.create("cards", {"player": "A", "notes": ""})

        await sql_store.update("cards", document_id, {"notes": "centered"})

        stored = await sql_store.get_by_id("cards", document_id)
        assert stored is not None
        assert stored.data == {"player": "A", "notes": "centered"}

    async def test_update_missing_raises_not_found(self, sql_store: SqlDocumentStore) -> None:
        with pytest.raises(RecordNotFoundError) as exc_info:
            await sql_store.update("cards", "gone", {"notes": "x"})

        assert exc_info.value.kind == FailureKind.NOT_FOUND

    async def test_delete_missing_is_false(self, sql_store: SqlDocumentStore) -> None:
        """Deleting a record that is already gone is not an error."""
        document_id = await sql_store.create("cards", {"player": "A"})

        assert await sql_store.delete("cards", document_id) is True
        assert await sql_store.delete("cards", document_id) is False

    async def test_set_with_merge(self, sql_store: SqlDocumentStore) -> None:
        await sql_store.set_with_merge("users", "uid-1", {"name": "Sam", "email": "s@x.com"})
        await sql_store.set_with_merge("users", "uid-1", {"name": "Sammy"})

        stored = await sql_store.get_by_id("users", "uid-1")

        assert stored is not None
        assert stored.data == {"name": "Sammy", "email": "s@x.com"}

    async def test_database_errors_become_storage_errors(self, async_engine) -> None:
        """A broken database surfaces as a known storage failure."""
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        store = SqlDocumentStore(async_sessionmaker(async_engine, class_=AsyncSession))

        with pytest.raises(ExternalServiceError) as exc_info:
            await store.query("cards")

        assert exc_info.value.kind == FailureKind.STORAGE_ERROR
        assert isinstance(exc_info.value.__cause__, OperationalError)

        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
