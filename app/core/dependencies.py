from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.database.db_setup import get_db
from app.infrastructure.document_store.base import DocumentStore
from app.infrastructure.document_store.sql_store import SqlDocumentStore


def get_document_store(request: Request, db: Session = Depends(get_db)) -> DocumentStore:
    if settings.DOCUMENT_STORE_BACKEND == "sql":
        return SqlDocumentStore(db)
    if settings.DOCUMENT_STORE_BACKEND == "memory":
        # Created by create_app(); one store per application instance.
        return request.app.state.memory_store
    raise RuntimeError(f"Unsupported DOCUMENT_STORE_BACKEND: {settings.DOCUMENT_STORE_BACKEND}")
