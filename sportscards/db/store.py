"""
SQLAlchemy-backed document store.

Implements the DocumentStore interface on top of the CRUD operations.
Each call runs in its own session and transaction.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sportscards.db.operations import (
    create_document,
    delete_document,
    get_document,
    query_documents,
    set_document,
    update_document,
)
from sportscards.models.db import DocumentDB
from sportscards.models.failure import ExternalServiceError, FailureKind, RecordNotFoundError
from sportscards.services.collaborators import StoredDocument

logger = logging.getLogger(__name__)


def _to_stored(document: DocumentDB) -> StoredDocument:
    return StoredDocument(id=document.id, data=dict(document.data or {}))


class SqlDocumentStore:
    """Document store over the `documents` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @classmethod
    def from_default_engine(cls) -> "SqlDocumentStore":
        """Store bound to the configured database_url."""
        from sportscards.db.database import async_session_factory

        return cls(async_session_factory)

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Storage %s failed: %s", operation, e)
                raise ExternalServiceError(
                    kind=FailureKind.STORAGE_ERROR,
                    service="storage",
                    message=f"Could not {operation} the record.",
                    detail=type(e).__name__,
                ) from e

    async def create(self, collection: str, record: dict[str, Any]) -> str:
        async with self._transaction("save") as session:
            document = await create_document(session, collection, record)
            document_id = document.id
        logger.info("Created %s/%s", collection, document_id)
        return document_id

    async def update(self, collection: str, document_id: str, partial: dict[str, Any]) -> None:
        async with self._transaction("update") as session:
            document = await update_document(session, collection, document_id, partial)
            if document is None:
                raise RecordNotFoundError(collection, document_id)
        logger.info("Updated %s/%s", collection, document_id)

    async def delete(self, collection: str, document_id: str) -> bool:
        async with self._transaction("delete") as session:
            deleted = await delete_document(session, collection, document_id)
        if deleted:
            logger.info("Deleted %s/%s", collection, document_id)
        return deleted

    async def query(
        self, collection: str, filters: dict[str, Any] | None = None
    ) -> list[StoredDocument]:
        async with self._transaction("load") as session:
            documents = await query_documents(session, collection, filters)
            return [_to_stored(d) for d in documents]

    async def get_by_id(self, collection: str, document_id: str) -> StoredDocument | None:
        async with self._transaction("load") as session:
            document = await get_document(session, collection, document_id)
            return _to_stored(document) if document is not None else None

    async def set_with_merge(
        self, collection: str, document_id: str, data: dict[str, Any]
    ) -> None:
        async with self._transaction("save") as session:
            await set_document(session, collection, document_id, data, merge=True)
