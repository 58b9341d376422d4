"""
Noteful API - Note Service Unit Tests
=====================================

What:  Tests for NoteService business logic (list, get, create, update, delete).
How:   Uses mock DB sessions (no real database).

What we test:
    ✅ Note not found raises NotFoundError("Note doesn't exist")
    ✅ Create stamps `modified` and maps FK violations to ConstraintError
    ✅ Partial updates merge only supplied fields
    ✅ Sanitization of name and content on reads
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError

from noteful.exceptions import ConstraintError, NotFoundError, ValidationError
from noteful.models import Note
from noteful.schemas.note import NoteCreate, NoteUpdate
from noteful.services.note_service import NoteService, merge_note_update

MODIFIED = datetime(2029, 1, 22, 16, 28, 32, tzinfo=timezone.utc)


def _note(**overrides) -> Note:
    fields = {
        "id": 2,
        "note_name": "Second note",
        "content": "Lorem ipsum two",
        "folder": 2,
        "modified": MODIFIED,
    }
    fields.update(overrides)
    return Note(**fields)


def _result_with_one(row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    return result


class TestMergeNoteUpdate:

    def test_only_supplied_fields_change(self):
        note = _note()

        merge_note_update(note, {"note_name": "updated note name"})

        assert note.note_name == "updated note name"
        assert note.content == "Lorem ipsum two"
        assert note.folder == 2
        assert note.modified == MODIFIED

    def test_all_fields(self):
        note = merge_note_update(
            _note(), {"note_name": "updated note", "content": "updated Content", "folder": 1}
        )
        assert (note.note_name, note.content, note.folder) == ("updated note", "updated Content", 1)


class TestNoteServiceGet:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_one(
            _note(note_name="<i>x</i>")
        )

        result = await self.service.get_note(mock_db_session, 2)

        assert result.id == 2
        assert result.note_name == "&lt;i&gt;x&lt;/i&gt;"
        assert result.modified == MODIFIED

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_one(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, 1234565)
        assert exc_info.value.message == "Note doesn't exist"

    @pytest.mark.parametrize("note_id", [0, 2_147_483_648, 9223372036854775808])
    @pytest.mark.asyncio
    async def test_get_note_out_of_range_id(self, mock_db_session, note_id):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(mock_db_session, note_id)
        assert exc_info.value.message == "Note doesn't exist"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_notes(self, mock_db_session):
        result = MagicMock()
        result.scalars.return_value.all.return_value = [_note(id=1), _note(id=2)]
        mock_db_session.execute.return_value = result

        notes = await self.service.list_notes(mock_db_session)

        assert [n.id for n in notes] == [1, 2]


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_success(self, mock_db_session):
        mock_db_session.add.side_effect = lambda note: setattr(note, "id", 5)
        before = datetime.now(timezone.utc)

        result = await self.service.create_note(
            mock_db_session,
            NoteCreate(note_name="New Note Name", content="New Note Content", folder=2),
        )

        assert result.id == 5
        assert result.folder == 2
        assert result.modified >= before
        mock_db_session.flush.assert_awaited_once()
        mock_db_session.refresh.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_note_missing_field(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create_note(mock_db_session, NoteCreate(note_name="n"))
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_note_unknown_folder(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
        )

        with pytest.raises(ConstraintError):
            await self.service.create_note(
                mock_db_session,
                NoteCreate(note_name="n", content="c", folder=999),
            )


class TestNoteServiceUpdate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_one(None)

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_db_session, 12345678, None)

    @pytest.mark.asyncio
    async def test_update_note_requires_a_field(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with_one(_note())

        with pytest.raises(ValidationError):
            await self.service.update_note(mock_db_session, 2, NoteUpdate())
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_note_partial(self, mock_db_session):
        note = _note()
        mock_db_session.execute.return_value = _result_with_one(note)

        await self.service.update_note(
            mock_db_session,
            2,
            NoteUpdate.model_validate({"note_name": "updated note name", "ignore": "x"}),
        )

        assert note.note_name == "updated note name"
        assert note.content == "Lorem ipsum two"
        assert not hasattr(note, "ignore")
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_note(self, mock_db_session):
        note = _note()
        mock_db_session.execute.return_value = _result_with_one(note)

        await self.service.delete_note(mock_db_session, 2)

        mock_db_session.delete.assert_awaited_once_with(note)
