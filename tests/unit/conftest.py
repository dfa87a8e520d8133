"""
Unit Test Fixtures.

Fixtures for unit tests - storage is in memory or mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from noteku.schemas.note import Category, Note


# =============================================================================
# Storage Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_store() -> AsyncMock:
    """
    Mock key-value store.

    Usage:
        async def test_read(mock_store):
            mock_store.get.return_value = "[]"
            repo = NoteRepository(mock_store)
    """
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock()
    return store


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def sample_notes() -> list[Note]:
    """A small mixed collection in display order."""
    return [
        Note(id="5", title="Groceries", content="<ul><li>milk</li><li>Eggs</li></ul>", category=Category.TODO, date="1/5/2026"),
        Note(id="4", title="Sprint plan", content="<p>Ship the <b>search</b> fix</p>", category=Category.WORK, date="1/4/2026"),
        Note(id="3", title="App idea", content="A diary that writes itself", category=Category.IDEAS, date="1/3/2026"),
        Note(id="2", title="Standup", content="blocked on review", category=Category.WORK, date="1/2/2026"),
        Note(id="1", title="Birthday", content="Buy MILK chocolate", category=Category.PERSONAL, date="1/1/2026"),
    ]


# =============================================================================
# Logging Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.logger", mock_logger):
                mock_logger.warning.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    return logger
