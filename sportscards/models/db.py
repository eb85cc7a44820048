"""
SQLAlchemy ORM models for persistent storage.

Cards and profiles are schemaless documents, so a single table stores
every collection with the document body as JSON.
"""

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def new_document_id() -> str:
    return uuid.uuid4().hex


class DocumentDB(Base):
    """
    One document in a named collection ("cards", "users").

    The id is assigned at insert unless the caller provides one
    (profile documents are keyed by the identity service uid).
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)
    collection: Mapped[str] = mapped_column(String(64), index=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<DocumentDB(collection={self.collection}, id={self.id})>"
