from sportscards.db.database import create_session_factory, init_db
from sportscards.db.operations import (
    create_document,
    delete_document,
    get_document,
    query_documents,
    set_document,
    update_document,
)
from sportscards.db.store import SqlDocumentStore

__all__ = [
    "SqlDocumentStore",
    "create_document",
    "create_session_factory",
    "delete_document",
    "get_document",
    "init_db",
    "query_documents",
    "set_document",
    "update_document",
]
