"""Pytest configuration and shared fixtures.

This module provides:
- Store fixtures for both document store backends (memory, SQLite in-memory)
- FastAPI test clients with the store dependency overridden
- Sample branch and employee payloads
"""

# Set environment variables BEFORE any imports that trigger Settings validation
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DOCUMENT_STORE_BACKEND", "memory")
os.environ.setdefault("REQUEST_LOGGING_ENABLED", "false")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_document_store
from app.database.db_setup import Base
from app.infrastructure.document_store.memory_store import InMemoryDocumentStore
from app.infrastructure.document_store.sql_store import SqlDocumentStore
from app.main import app
from app.models import document  # noqa: F401  registers the documents table


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def sql_session() -> Generator[Session, None, None]:
    """A session bound to a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each store-level test runs once per backend."""
    if request.param == "memory":
        return InMemoryDocumentStore()
    return SqlDocumentStore(request.getfixturevalue("sql_session"))


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def client(memory_store: InMemoryDocumentStore) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_document_store] = lambda: memory_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sql_client(sql_session: Session) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_document_store] = lambda: SqlDocumentStore(sql_session)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def branch_payload() -> dict:
    return {"name": "Main", "address": "123 Street", "phone": "123-456-7890"}


@pytest.fixture
def employee_payload() -> dict:
    return {
        "name": "Jane Doe",
        "position": "Teller",
        "department": "Operations",
        "email": "jane.doe@example.com",
        "phone": "204-555-0134",
        "branchId": "branch-1",
    }
