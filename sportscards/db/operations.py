"""
Database CRUD operations.

Provides async functions for creating, reading, updating, and deleting
documents within a named collection.
"""

from typing import Any

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sportscards.models.db import DocumentDB


def _field_equals(field: str, value: Any) -> ColumnElement[bool]:
    """Equality predicate on a top-level JSON field."""
    element = DocumentDB.data[field]
    if isinstance(value, bool):
        return element.as_boolean() == value
    if isinstance(value, int):
        return element.as_integer() == value
    if isinstance(value, float):
        return element.as_float() == value
    if isinstance(value, str):
        return element.as_string() == value
    msg = f"Unsupported filter value for '{field}': {value!r}"
    raise TypeError(msg)


async def create_document(
    session: AsyncSession,
    collection: str,
    data: dict[str, Any],
    document_id: str | None = None,
) -> DocumentDB:
    """
    Insert a new document.

    The id is generated unless document_id is given.
    """
    document = DocumentDB(collection=collection, data=dict(data))
    if document_id is not None:
        document.id = document_id
    session.add(document)
    await session.flush()
    return document


async def get_document(
    session: AsyncSession, collection: str, document_id: str
) -> DocumentDB | None:
    """
    Get a document by id.

    Returns None if the document does not exist in this collection.
    """
    result = await session.execute(
        select(DocumentDB).where(
            DocumentDB.collection == collection,
            DocumentDB.id == document_id,
        )
    )
    return result.scalar_one_or_none()


async def query_documents(
    session: AsyncSession,
    collection: str,
    filters: dict[str, Any] | None = None,
) -> list[DocumentDB]:
    """Get all documents in a collection whose fields equal every filter value."""
    statement = select(DocumentDB).where(DocumentDB.collection == collection)
    for field, value in (filters or {}).items():
        statement = statement.where(_field_equals(field, value))
    statement = statement.order_by(DocumentDB.created_at, DocumentDB.id)

    result = await session.execute(statement)
    return list(result.scalars().all())


async def update_document(
    session: AsyncSession,
    collection: str,
    document_id: str,
    partial: dict[str, Any],
) -> DocumentDB | None:
    """
    Merge fields into an existing document.

    Returns None if the document does not exist.
    """
    document = await get_document(session, collection, document_id)
    if document is None:
        return None

    # Reassign so the JSON column is marked dirty
    document.data = {**document.data, **partial}
    await session.flush()
    return document


async def set_document(
    session: AsyncSession,
    collection: str,
    document_id: str,
    data: dict[str, Any],
    merge: bool = True,
) -> DocumentDB:
    """
    Write a document at a known id, creating it if missing.

    With merge=True existing fields not present in data are kept.
    """
    document = await get_document(session, collection, document_id)
    if document is None:
        return await create_document(session, collection, data, document_id=document_id)

    document.data = {**document.data, **data} if merge else dict(data)
    await session.flush()
    return document


async def delete_document(session: AsyncSession, collection: str, document_id: str) -> bool:
    """
    Delete a document.

    Returns True if deleted, False if not found.
    """
    result = await session.execute(
        delete(DocumentDB).where(
            DocumentDB.collection == collection,
            DocumentDB.id == document_id,
        )
    )
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
