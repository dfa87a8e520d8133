"""
Note Repository.

Data access layer for notes. The whole collection is one JSON array
stored under a single key of a KeyValueStore, oldest first. Every
mutation reads the full blob, applies the change and writes the full
blob back.
"""

import asyncio
import json
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from noteku.core.exceptions import CorruptDataError
from noteku.core.logging import get_logger, log_with_source
from noteku.core.utils import epoch_millis, format_display_date, local_now
from noteku.repositories.storage import KeyValueStore
from noteku.schemas.note import Note, normalize_id

logger = get_logger(__name__)

DEFAULT_STORAGE_KEY = "NOTES"
DEFAULT_UNTITLED_TITLE = "Untitled"


def record_id(record: dict[str, Any]) -> str | None:
    """Id of a raw stored record, normalized the way Note reads it."""
    try:
        value = normalize_id(record.get("id"))
    except ValueError:
        return None
    return value if isinstance(value, str) else None


class NoteRepository:
    """
    Repository for the note collection blob.

    Records that fail validation are skipped when listing but kept
    verbatim in the blob, so a schema drift never destroys data on the
    next write. Mutations are serialized by a lock so overlapping saves
    from the same process cannot drop each other's changes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        untitled_title: str = DEFAULT_UNTITLED_TITLE,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.store = store
        self.key = key
        self.untitled_title = untitled_title
        self._clock = clock
        self._lock = asyncio.Lock()
        self._last_minted = 0

    async def _read_records(self) -> list[dict[str, Any]]:
        """
        Read and decode the collection blob.

        Raises:
            StorageUnavailableError: If the store cannot be read
            CorruptDataError: If the blob is not a JSON array of objects
        """
        blob = await self.store.get(self.key)
        if blob is None or not blob.strip():
            return []

        try:
            records = json.loads(blob)
        except ValueError as e:
            log_with_source(logger, "storage", "warning", "Note blob is not JSON", key=self.key)
            raise CorruptDataError(f"Stored value under {self.key!r} is not valid JSON") from e

        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            log_with_source(logger, "storage", "warning", "Note blob has wrong shape", key=self.key)
            raise CorruptDataError(f"Stored value under {self.key!r} is not a list of notes")
        return records

    async def _write_records(self, records: list[dict[str, Any]]) -> None:
        await self.store.set(self.key, json.dumps(records, ensure_ascii=False))

    def _parse(self, records: list[dict[str, Any]]) -> list[Note]:
        notes = []
        for position, record in enumerate(records):
            try:
                note = Note.model_validate(record)
            except PydanticValidationError as e:
                logger.warning(
                    "Skipping unreadable note record",
                    position=position,
                    errors=e.error_count(),
                )
                continue
            if note.id is None:
                logger.warning("Skipping note record without id", position=position)
                continue
            notes.append(note)
        return notes

    def _mint_id(self, records: list[dict[str, Any]], now: datetime) -> str:
        """Wall-clock milliseconds, bumped above every id minted or stored."""
        highest = self._last_minted
        for record in records:
            value = record_id(record) or ""
            if value.isdigit():
                highest = max(highest, int(value))
        self._last_minted = max(epoch_millis(now), highest + 1)
        return str(self._last_minted)

    async def list(self) -> list[Note]:
        """
        Get all notes, most recently added first.

        Raises:
            StorageUnavailableError: If the store cannot be read
            CorruptDataError: If the stored blob cannot be parsed
        """
        records = await self._read_records()
        return list(reversed(self._parse(records)))

    async def get(self, note_id: str) -> Note | None:
        """Get a single note by id, or None if absent."""
        for note in await self.list():
            if note.id == note_id:
                return note
        return None

    async def save(self, note: Note) -> Note:
        """
        Persist a note.

        Without an id a new one is minted and the note is appended. With
        an id that matches a stored record, that record is replaced in
        place. With an id that matches nothing the note is appended.

        Returns:
            The note as stored, with its final id, title and date
        """
        async with self._lock:
            records = await self._read_records()

            now = self._clock()
            updates: dict[str, Any] = {"date": format_display_date(now)}
            if note.id is None:
                updates["id"] = self._mint_id(records, now)
            if not note.title.strip():
                updates["title"] = self.untitled_title
            saved = note.model_copy(update=updates)

            record = saved.to_record()
            for position, existing in enumerate(records):
                if record_id(existing) == saved.id:
                    records[position] = record
                    action = "replaced"
                    break
            else:
                records.append(record)
                action = "appended" if note.id is None else "appended_unknown_id"

            await self._write_records(records)

        logger.info("Note saved", note_id=saved.id, action=action, total=len(records))
        return saved

    async def delete(self, note_id: str) -> None:
        """Remove the note with ``note_id``. Absent ids are a no-op."""
        async with self._lock:
            records = await self._read_records()
            remaining = [r for r in records if record_id(r) != note_id]
            if len(remaining) == len(records):
                logger.debug("Delete of absent note ignored", note_id=note_id)
                return
            await self._write_records(remaining)

        logger.info("Note deleted", note_id=note_id, total=len(remaining))
