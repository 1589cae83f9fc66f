"""
Noteful Backend — Note Service Unit Tests
==========================================

What:  Tests for NoteService orchestration (list, get, create, update, delete).
How:   Mock DB session and a patched Query Layer (no real DB).

What we test:
    ✅ Filters and payload fields reach the Query Layer unchanged
    ✅ Write steps run in order: scalars → tags → re-read
    ✅ Missing notes raise NotFoundError (before tags are touched on update)
    ✅ Store failures surface as DatabaseError
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import IntegrityError, OperationalError

from noteful.exceptions import DatabaseError, NotFoundError
from noteful.schemas.note import NoteCreate, NoteFilterParams, NoteUpdate
from noteful.services.note_service import NoteService


def _rows(note_id, tags=()):
    base = {
        "id": note_id,
        "title": "Title",
        "content": "Body",
        "created_at": datetime.now(timezone.utc),
        "folder_id": None,
        "folder_name": None,
    }
    if not tags:
        return [{**base, "tag_id": None, "tag_name": None}]
    return [{**base, "tag_id": t, "tag_name": f"tag-{t}"} for t in tags]


def _patched_queries():
    mock_queries = patch("noteful.services.note_service.note_queries").start()
    mock_queries.list_note_rows = AsyncMock(return_value=[])
    mock_queries.get_note_rows = AsyncMock(return_value=[])
    mock_queries.insert_note = AsyncMock(return_value=1)
    mock_queries.update_note = AsyncMock(return_value=True)
    mock_queries.replace_tags = AsyncMock()
    mock_queries.delete_note = AsyncMock()
    return mock_queries


class TestNoteServiceRead:
    """Tests for list_notes and get_note."""

    def setup_method(self):
        self.service = NoteService()
        self.queries = _patched_queries()

    def teardown_method(self):
        patch.stopall()

    @pytest.mark.asyncio
    async def test_list_notes_passes_filters(self, mock_db_session):
        self.queries.list_note_rows.return_value = _rows(1, tags=[3, 4]) + _rows(2)

        filters = NoteFilterParams(search_term="cat", folder_id=2, tag_id=3)
        result = await self.service.list_notes(mock_db_session, filters)

        self.queries.list_note_rows.assert_awaited_once_with(
            mock_db_session, search_term="cat", folder_id=2, tag_id=3
        )
        assert [n.id for n in result] == [1, 2]
        assert [t.id for t in result[0].tags] == [3, 4]

    @pytest.mark.asyncio
    async def test_list_notes_store_error(self, mock_db_session):
        self.queries.list_note_rows.side_effect = OperationalError(
            "SELECT", {}, Exception("connection lost")
        )

        with pytest.raises(DatabaseError):
            await self.service.list_notes(mock_db_session, NoteFilterParams())

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session):
        self.queries.get_note_rows.return_value = _rows(5, tags=[1])

        note = await self.service.get_note(mock_db_session, 5)

        assert note.id == 5
        assert [t.id for t in note.tags] == [1]

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, 404)


class TestNoteServiceWrite:
    """Tests for create_note, update_note and delete_note."""

    def setup_method(self):
        self.service = NoteService()
        self.queries = _patched_queries()

    def teardown_method(self):
        patch.stopall()

    @pytest.mark.asyncio
    async def test_create_note_steps_in_order(self, mock_db_session):
        self.queries.insert_note.return_value = 7
        self.queries.get_note_rows.return_value = _rows(7, tags=[1, 2])

        payload = NoteCreate(title="New", content="Body", folder_id=3, tags=[1, 2])
        note = await self.service.create_note(mock_db_session, payload)

        self.queries.insert_note.assert_awaited_once_with(
            mock_db_session, title="New", content="Body", folder_id=3
        )
        self.queries.replace_tags.assert_awaited_once_with(mock_db_session, 7, [1, 2])
        called = [c[0] for c in self.queries.mock_calls]
        assert called == ["insert_note", "replace_tags", "get_note_rows"]
        assert note.id == 7

    @pytest.mark.asyncio
    async def test_create_note_tag_failure_is_database_error(self, mock_db_session):
        self.queries.replace_tags.side_effect = IntegrityError(
            "INSERT", {}, Exception("foreign key")
        )

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteCreate(title="x", tags=[99]))

    @pytest.mark.asyncio
    async def test_update_note_writes_only_sent_scalars(self, mock_db_session):
        self.queries.get_note_rows.return_value = _rows(4, tags=[3])

        payload = NoteUpdate.model_validate({"title": "Renamed", "tags": [3]})
        await self.service.update_note(mock_db_session, 4, payload)

        self.queries.update_note.assert_awaited_once_with(
            mock_db_session, 4, {"title": "Renamed"}
        )
        self.queries.replace_tags.assert_awaited_once_with(mock_db_session, 4, [3])
        called = [c[0] for c in self.queries.mock_calls]
        assert called == ["update_note", "replace_tags", "get_note_rows"]

    @pytest.mark.asyncio
    async def test_update_note_explicit_null_folder_detaches(self, mock_db_session):
        self.queries.get_note_rows.return_value = _rows(4)

        payload = NoteUpdate.model_validate(
            {"title": "T", "content": "C", "folderId": None}
        )
        await self.service.update_note(mock_db_session, 4, payload)

        self.queries.update_note.assert_awaited_once_with(
            mock_db_session, 4, {"title": "T", "content": "C", "folder_id": None}
        )
        # tags omitted → tag set cleared
        self.queries.replace_tags.assert_awaited_once_with(mock_db_session, 4, [])

    @pytest.mark.asyncio
    async def test_update_missing_note_leaves_tags_alone(self, mock_db_session):
        self.queries.update_note.return_value = False

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_db_session, 404, NoteUpdate(title="x"))

        self.queries.replace_tags.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_note(self, mock_db_session):
        await self.service.delete_note(mock_db_session, 3)

        self.queries.delete_note.assert_awaited_once_with(mock_db_session, 3)
