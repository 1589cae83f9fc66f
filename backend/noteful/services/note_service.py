"""
Noteful Backend — Note Service (Business Logic Orchestrator)
=============================================================

What:  Coordinates the Query Layer and the Hydration Engine for every notes
       operation: list/search, get, create, update, delete.
Why:   Keeps HTTP concerns in the routes and SQL shape in note_queries.
Who:   Called by the notes route handlers.

Write flows (all inside the request's single transaction):
    create:  insert note → insert tag associations → re-read → hydrate
    update:  update scalars → delete associations → insert associations
             → re-read → hydrate
    delete:  delete associations → delete note

Error Handling Strategy:
    Request bodies are validated by the Pydantic schemas before we get here.
    Application errors (NotFoundError) propagate unchanged. Store failures
    (SQLAlchemyError) are logged with context and re-raised as DatabaseError,
    whose handler returns a generic 500. Nothing is retried.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError
from noteful.schemas.note import (
    NoteCreate,
    NoteFilterParams,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.hydration import hydrate_note, hydrate_notes
from noteful.services.note_queries import note_queries

logger = logging.getLogger(__name__)


class NoteService:
    """
    Stateless orchestration of note operations.

    Responsibilities:
        - list_notes(): filtered listing, all tags of each matched note
        - get_note(): single note, NotFoundError when absent
        - create_note() / update_note(): scalar write + tag set replacement
        - delete_note(): idempotent removal
    """

    async def list_notes(
        self, db: AsyncSession, filters: NoteFilterParams
    ) -> List[NoteResponse]:
        try:
            rows = await note_queries.list_note_rows(
                db,
                search_term=filters.search_term,
                folder_id=filters.folder_id,
                tag_id=filters.tag_id,
            )
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        return hydrate_notes(rows)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve one hydrated note.

        Raises:
            NotFoundError: no note with that id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            rows = await note_queries.get_note_rows(db, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        note = hydrate_note(rows)
        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return note

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a note with its tag set and return it hydrated.

        Raises:
            DatabaseError: e.g. unknown folder or tag id (foreign key violation)
        """
        try:
            note_id = await note_queries.insert_note(
                db,
                title=payload.title,
                content=payload.content,
                folder_id=payload.folder_id,
            )
            await note_queries.replace_tags(db, note_id, payload.tags)
            rows = await note_queries.get_note_rows(db, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created with %d tag(s)", note_id, len(payload.tags))
        return hydrate_notes(rows)[0]

    async def update_note(
        self, db: AsyncSession, note_id: int, payload: NoteUpdate
    ) -> NoteResponse:
        """
        Update the supplied scalar fields and replace the whole tag set.

        The existence check happens on the scalar update, before any
        association is touched.

        Raises:
            NotFoundError: no note with that id (→ 404)
            DatabaseError: store failure; the request transaction rolls back
        """
        try:
            found = await note_queries.update_note(db, note_id, payload.scalar_updates())
            if not found:
                raise NotFoundError(resource="note", resource_id=note_id)
            await note_queries.replace_tags(db, note_id, payload.tags)
            rows = await note_queries.get_note_rows(db, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Note %s updated; tags now %s", note_id, payload.tags)
        return hydrate_notes(rows)[0]

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """Delete a note and its associations; succeeds even if it never existed."""
        try:
            await note_queries.delete_note(db, note_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e
        logger.info("Note %s deleted", note_id)


# NoteService is stateless; one shared instance
note_service = NoteService()
