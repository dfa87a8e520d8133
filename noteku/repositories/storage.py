"""
Key-Value Storage.

The persistence boundary behind NoteRepository: string values stored
under string keys. The note collection occupies a single key, so the
store never needs to know what a note is.

Implementations:
    MemoryKeyValueStore - process-local dict, for tests and ephemeral use
    SqlKeyValueStore    - one row per key in ``kv_entries`` (async SQLAlchemy)

Usage:
    from noteku.repositories.storage import SqlKeyValueStore

    store = SqlKeyValueStore(get_session_factory())
    blob = await store.get("NOTES")
"""

from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noteku.core.exceptions import StorageUnavailableError
from noteku.core.logging import get_logger
from noteku.models.kv_entry import KeyValueEntry

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """Async string-to-string store."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Read the value stored under ``key``.

        Returns:
            The stored string, or None if the key was never written

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under ``key``.

        Raises:
            StorageUnavailableError: If the backend cannot be written
        """


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Contents vanish with the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SqlKeyValueStore(KeyValueStore):
    """
    Store backed by the ``kv_entries`` table.

    Each call opens its own session and commits before returning, so a
    ``set`` is durable once awaited. SQLAlchemy failures are converted to
    StorageUnavailableError at this boundary.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(KeyValueEntry.value).where(KeyValueEntry.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Key-value read failed", key=key, error=str(e))
            raise StorageUnavailableError(f"Cannot read key {key!r}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self._session_factory() as session:
                entry = await session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Key-value write failed", key=key, error=str(e))
            raise StorageUnavailableError(f"Cannot write key {key!r}") from e
        logger.debug("Key-value entry written", key=key, size=len(value))
