"""
Unit Tests for Note Service.

Tests the NoteService orchestration and its error propagation policy:
storage failures come back as failed Results, never as exceptions.
"""

from unittest.mock import AsyncMock, patch

import pytest

from noteku.core.exceptions import CorruptDataError, StorageUnavailableError
from noteku.repositories.note import NoteRepository
from noteku.repositories.storage import MemoryKeyValueStore
from noteku.schemas.note import Category, ChecklistItem, Note
from noteku.services.note import NoteService, create_note_service, open_note_service


@pytest.fixture
def service(repo):
    """NoteService over an empty memory-backed repository."""
    return NoteService(repo)


class TestNoteServiceList:
    """Tests for listing and searching."""

    @pytest.mark.asyncio
    async def test_list_notes_success(self, service):
        await service.save_note(Note(title="A"))

        result = await service.list_notes()

        assert result.success is True
        assert len(result.data) == 1
        assert result.error is None

    @pytest.mark.asyncio
    async def test_list_notes_storage_unavailable_degrades_to_empty(self, service):
        with patch.object(service.repo, "list", side_effect=StorageUnavailableError("offline")):
            result = await service.list_notes()

        assert result.success is False
        assert result.data == []
        assert result.error.code == "STORE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_list_notes_corrupt_data_degrades_to_empty(self):
        service = NoteService(NoteRepository(MemoryKeyValueStore({"NOTES": "}{"})))

        result = await service.list_notes()

        assert result.success is False
        assert result.data == []
        assert result.error.code == "STORE_CORRUPT_DATA"

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, service, mock_logger):
        service._logger = mock_logger
        with patch.object(service.repo, "list", side_effect=StorageUnavailableError("offline")):
            await service.list_notes()

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.kwargs["code"] == "STORE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_search_filters(self, service):
        await service.save_note(Note(title="Groceries", category=Category.TODO))
        await service.save_note(Note(title="Report", category=Category.WORK))

        result = await service.search("gro", "All")

        assert [n.title for n in result.data] == ["Groceries"]

    @pytest.mark.asyncio
    async def test_search_on_failure_keeps_empty_data(self, service):
        with patch.object(service.repo, "list", side_effect=StorageUnavailableError()):
            result = await service.search("x", Category.WORK)

        assert result.success is False
        assert result.data == []

    @pytest.mark.asyncio
    async def test_masonry_splits_filtered_notes(self, service):
        for title in ["a", "b", "c"]:
            await service.save_note(Note(title=title, category=Category.IDEAS))

        result = await service.masonry()

        left, right = result.data
        assert [n.title for n in left] == ["c", "a"]
        assert [n.title for n in right] == ["b"]

    @pytest.mark.asyncio
    async def test_masonry_on_failure_is_two_empty_columns(self, service):
        with patch.object(service.repo, "list", side_effect=StorageUnavailableError()):
            result = await service.masonry()

        assert result.success is False
        assert result.data == ([], [])


class TestNoteServiceSave:
    """Tests for saving notes and checklists."""

    @pytest.mark.asyncio
    async def test_save_note_returns_persisted_note(self, service):
        result = await service.save_note(Note(title="A", content="x", category=Category.WORK))

        assert result.success is True
        assert result.data.id
        listed = await service.list_notes()
        assert [n.id for n in listed.data] == [result.data.id]

    @pytest.mark.asyncio
    async def test_second_save_replaces(self, service):
        first = (await service.save_note(Note(title="A"))).data
        await service.save_note(first.model_copy(update={"content": "changed"}))

        listed = (await service.list_notes()).data

        assert len(listed) == 1
        assert listed[0].content == "changed"

    @pytest.mark.asyncio
    async def test_save_failure_returns_failed_result(self, service):
        with patch.object(service.repo, "save", AsyncMock(side_effect=CorruptDataError())):
            result = await service.save_note(Note(title="A"))

        assert result.success is False
        assert result.data is None

    @pytest.mark.asyncio
    async def test_save_checklist_encodes_and_forces_todo(self, service):
        items = [ChecklistItem(text="milk", checked=True), ChecklistItem(text="eggs")]

        result = await service.save_checklist(Note(title="Groceries", category=Category.WORK), items)

        saved = result.data
        assert saved.category is Category.TODO
        assert service.load_checklist(saved) == items

    @pytest.mark.asyncio
    async def test_save_empty_checklist_stores_empty_content(self, service):
        result = await service.save_checklist(Note(title="Later"), [])
        assert result.data.content == ""

    def test_load_checklist_of_plain_note(self, service):
        assert service.load_checklist(Note(content="<p>not a list</p>")) == []

    def test_new_note_uses_default_category(self, repo):
        service = NoteService(repo, default_category=Category.IDEAS)
        note = service.new_note()
        assert note.id is None
        assert note.category is Category.IDEAS
        assert service.new_note(Category.TODO).category is Category.TODO


class TestNoteServiceGetDelete:
    """Tests for lookup and deletion."""

    @pytest.mark.asyncio
    async def test_get_note(self, service):
        saved = (await service.save_note(Note(title="A"))).data
        assert (await service.get_note(saved.id)).data.title == "A"

    @pytest.mark.asyncio
    async def test_get_missing_note(self, service):
        result = await service.get_note("nope")
        assert result.success is True
        assert result.data is None

    @pytest.mark.asyncio
    async def test_delete_note(self, service):
        saved = (await service.save_note(Note(title="A"))).data

        result = await service.delete_note(saved.id)

        assert result.success is True
        assert (await service.list_notes()).data == []

    @pytest.mark.asyncio
    async def test_delete_missing_succeeds(self, service):
        assert (await service.delete_note("nope")).success is True

    @pytest.mark.asyncio
    async def test_delete_failure_returns_failed_result(self, service):
        with patch.object(service.repo, "delete", AsyncMock(side_effect=StorageUnavailableError())):
            result = await service.delete_note("1")
        assert result.success is False


class TestCreateNoteService:
    """Tests for building the service from notes.yaml."""

    def test_uses_configured_key_and_placeholder(self, memory_store):
        service = create_note_service(memory_store)

        assert service.repo.key == "NOTES"
        assert service.repo.untitled_title == "Untitled"
        assert service.repo.store is memory_store
        assert service.default_category is Category.PERSONAL

    def test_defaults_to_sql_store(self):
        from noteku.repositories.storage import SqlKeyValueStore

        with patch("noteku.core.database.get_session_factory") as mock_factory:
            service = create_note_service()

        mock_factory.assert_called_once()
        assert isinstance(service.repo.store, SqlKeyValueStore)


class TestOpenNoteService:
    """Tests for application startup."""

    @pytest.mark.asyncio
    async def test_applies_logging_config(self, memory_store):
        with patch("noteku.core.logging.setup_logging") as mock_setup, \
             patch("noteku.core.database.init_db") as mock_init_db:
            service = await open_note_service(memory_store)

        mock_setup.assert_called_once_with(level="INFO")
        mock_init_db.assert_not_called()
        assert service.repo.store is memory_store

    @pytest.mark.asyncio
    async def test_default_store_creates_table(self):
        with patch("noteku.core.logging.setup_logging"), \
             patch("noteku.core.database.init_db", AsyncMock()) as mock_init_db, \
             patch("noteku.core.database.get_session_factory"):
            await open_note_service()

        mock_init_db.assert_awaited_once()
