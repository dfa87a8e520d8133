"""
Integration Test Fixtures.

Fixtures for integration tests - real SQLite store, real repository.
These fixtures build on the root conftest.py database fixtures.
"""

import pytest

from noteku.repositories.note import NoteRepository
from noteku.repositories.storage import SqlKeyValueStore
from noteku.services.note import NoteService


@pytest.fixture
def sql_store(db_session_factory) -> SqlKeyValueStore:
    return SqlKeyValueStore(db_session_factory)


@pytest.fixture
def sql_service(sql_store) -> NoteService:
    return NoteService(NoteRepository(sql_store))
