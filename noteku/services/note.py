"""
Note Service.

Orchestrates the repository, the content codec and the query functions
into the operations display code calls. Storage failures come back as
failed Results carrying an empty collection.
"""

from collections.abc import Iterable

from noteku.core.logging import get_logger
from noteku.repositories.note import NoteRepository
from noteku.repositories.storage import KeyValueStore
from noteku.schemas.base import Result
from noteku.schemas.note import ALL_CATEGORIES, Category, ChecklistItem, Note
from noteku.services.base import BaseService
from noteku.services.codec import decode_checklist, encode_checklist
from noteku.services.query import filter_notes, partition_for_masonry

logger = get_logger(__name__)


class NoteService(BaseService):
    """Service for note listing, searching, editing and deletion."""

    def __init__(
        self,
        repo: NoteRepository,
        default_category: Category = Category.PERSONAL,
    ) -> None:
        super().__init__()
        self.repo = repo
        self.default_category = default_category

    def new_note(self, category: Category | None = None) -> Note:
        """Blank, unsaved note for the editor."""
        return Note(category=category or self.default_category)

    async def list_notes(self) -> Result:
        """All notes, newest first. Empty list on storage failure."""
        return await self._run("list_notes", self.repo.list(), fallback=[])

    async def get_note(self, note_id: str) -> Result:
        """A single note for the editor. ``data`` is None if absent."""
        return await self._run("get_note", self.repo.get(note_id))

    async def search(
        self,
        search_text: str = "",
        category: Category | str = ALL_CATEGORIES,
    ) -> Result:
        """List notes, then filter by category and search text."""
        result = await self.list_notes()
        if result.success:
            result.data = filter_notes(result.data, search_text, category)
        return result

    async def masonry(
        self,
        search_text: str = "",
        category: Category | str = ALL_CATEGORIES,
    ) -> Result:
        """Filtered notes split into left and right columns."""
        result = await self.search(search_text, category)
        result.data = partition_for_masonry(result.data or [])
        return result

    async def save_note(self, note: Note) -> Result:
        """Create or update a note."""
        self._log_operation("Saving note", note_id=note.id, category=note.category.value)
        return await self._run("save_note", self.repo.save(note))

    async def save_checklist(self, note: Note, items: Iterable[ChecklistItem]) -> Result:
        """Encode ``items`` into the note's content and save it as a To-Do note."""
        items = list(items)
        content = encode_checklist(items)
        updated = note.model_copy(update={"content": content, "category": Category.TODO})
        self._log_operation("Saving checklist", note_id=note.id, items=len(items))
        return await self._run("save_checklist", self.repo.save(updated))

    def load_checklist(self, note: Note) -> list[ChecklistItem]:
        """Checklist items of a note, for the editor."""
        return decode_checklist(note.content)

    async def delete_note(self, note_id: str) -> Result:
        """Delete a note. Deleting an absent note succeeds."""
        self._log_operation("Deleting note", note_id=note_id)
        return await self._run("delete_note", self.repo.delete(note_id))


def create_note_service(store: KeyValueStore | None = None) -> NoteService:
    """
    Build a NoteService from notes.yaml.

    Args:
        store: Backing store; defaults to the SQL store from database.yaml

    Returns:
        Configured NoteService
    """
    from noteku.core.config import get_app_config

    notes_config = get_app_config().notes
    if store is None:
        from noteku.core.database import get_session_factory
        from noteku.repositories.storage import SqlKeyValueStore

        store = SqlKeyValueStore(get_session_factory())

    repo = NoteRepository(
        store,
        key=notes_config.storage_key,
        untitled_title=notes_config.untitled_title,
    )
    logger.debug("Note service created", storage_key=notes_config.storage_key)
    return NoteService(repo, default_category=notes_config.default_category)


async def open_note_service(store: KeyValueStore | None = None) -> NoteService:
    """
    Application startup: apply logging.yaml, then build the note service.

    With the default SQL store its table is created first.

    Args:
        store: Backing store; when given, no database setup happens
    """
    from noteku.core.config import get_app_config
    from noteku.core.logging import setup_logging

    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)
    logger.info(
        "Opening note service",
        app_name=app_config.application.name,
        env=app_config.application.environment,
    )

    if store is None:
        from noteku.core.database import init_db

        await init_db()
    return create_note_service(store)
