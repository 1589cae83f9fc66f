"""
Noteful Backend — Note Query Layer
===================================

What:  Builds and executes the relational queries behind the notes API.
Why:   Keeps SQL shape (joins, filters, ordering) in one place, separate from
       request orchestration (note_service) and row folding (hydration).
How:   SQLAlchemy 2.0 Core-style statements executed on the request's
       AsyncSession. Reads return row mappings ready for hydration.

Join shape used by every read:

    notes
      LEFT JOIN folders    ON notes.folder_id = folders.id
      LEFT JOIN notes_tags ON notes.id = notes_tags.note_id
      LEFT JOIN tags       ON notes_tags.tag_id = tags.id

A note with k tags yields k rows (one row with NULL tag columns when k == 0).

Tag filtering:
    Filtering the joined rows by tag would keep only the matching tag's row and
    the other tags of that note would be lost. Instead the filters select the
    matching note ids, and the joined rows are re-read for that id set:

        ... WHERE notes.id IN (SELECT notes.id FROM notes
                               JOIN notes_tags ... WHERE tag_id = :tag ...)
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import Select, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models import Folder, Note, Tag, notes_tags

logger = logging.getLogger(__name__)

# Row keys consumed by noteful.services.hydration
HYDRATION_COLUMNS = (
    Note.id.label("id"),
    Note.title.label("title"),
    Note.content.label("content"),
    Note.created_at.label("created_at"),
    Folder.id.label("folder_id"),
    Folder.name.label("folder_name"),
    Tag.id.label("tag_id"),
    Tag.name.label("tag_name"),
)


def joined_notes_select() -> Select:
    """SELECT of the hydration columns over the notes/folders/tags LEFT JOINs."""
    return (
        select(*HYDRATION_COLUMNS)
        .select_from(Note)
        .outerjoin(Folder, Note.folder_id == Folder.id)
        .outerjoin(notes_tags, Note.id == notes_tags.c.note_id)
        .outerjoin(Tag, notes_tags.c.tag_id == Tag.id)
    )


def matching_note_ids(
    search_term: Optional[str] = None,
    folder_id: Optional[int] = None,
    tag_id: Optional[int] = None,
) -> Select:
    """
    SELECT of the ids of notes passing every supplied filter.

    search_term matches the title only, case-insensitively; LIKE wildcards in
    the term are escaped so "50%" means the literal text.
    """
    query = select(Note.id)
    if tag_id is not None:
        query = query.join(notes_tags, Note.id == notes_tags.c.note_id).where(
            notes_tags.c.tag_id == tag_id
        )
    if search_term:
        query = query.where(Note.title.icontains(search_term, autoescape=True))
    if folder_id is not None:
        query = query.where(Note.folder_id == folder_id)
    return query


class NoteQueries:
    """
    Stateless query operations on notes and their tag associations.

    All methods take the request's session; none of them commit. The session
    dependency owns the transaction.
    """

    async def list_note_rows(
        self,
        db: AsyncSession,
        search_term: Optional[str] = None,
        folder_id: Optional[int] = None,
        tag_id: Optional[int] = None,
    ) -> List[Mapping[str, Any]]:
        """
        Joined rows for every note matching the filters, with all of their tags.

        Ordered by note id, then tag id, so hydration output is deterministic.
        """
        ids = matching_note_ids(search_term, folder_id, tag_id)
        query = (
            joined_notes_select()
            .where(Note.id.in_(ids))
            .order_by(Note.id, Tag.id)
        )
        result = await db.execute(query)
        rows = list(result.mappings().all())
        logger.debug(
            "list_note_rows(search_term=%r, folder_id=%s, tag_id=%s) -> %d rows",
            search_term, folder_id, tag_id, len(rows),
        )
        return rows

    async def get_note_rows(
        self, db: AsyncSession, note_id: int
    ) -> List[Mapping[str, Any]]:
        """Joined rows for one note: none if it does not exist, else one per tag."""
        query = (
            joined_notes_select()
            .where(Note.id == note_id)
            .order_by(Tag.id)
        )
        result = await db.execute(query)
        return list(result.mappings().all())

    async def insert_note(
        self,
        db: AsyncSession,
        title: str,
        content: Optional[str] = None,
        folder_id: Optional[int] = None,
    ) -> int:
        """Insert the note's scalar fields and return the store-assigned id."""
        note = Note(title=title, content=content, folder_id=folder_id)
        db.add(note)
        await db.flush()  # Assigns the id without committing
        logger.info("Note record created: %s", note.id)
        return note.id

    async def update_note(
        self, db: AsyncSession, note_id: int, fields: Dict[str, Any]
    ) -> bool:
        """
        Write the given subset of {title, content, folder_id}.

        Returns:
            True if a note with that id exists (whether or not values changed)
        """
        result = await db.execute(
            update(Note).where(Note.id == note_id).values(**fields)
        )
        return result.rowcount > 0

    async def replace_tags(
        self, db: AsyncSession, note_id: int, tag_ids: Sequence[int]
    ) -> None:
        """
        Make `tag_ids` the note's complete tag set.

        Deletes every existing association, then inserts one row per distinct
        id. An empty sequence leaves the note untagged.
        """
        await db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))

        # Repeated ids would violate the (note_id, tag_id) primary key
        distinct_ids = list(dict.fromkeys(tag_ids))
        if distinct_ids:
            await db.execute(
                insert(notes_tags),
                [{"note_id": note_id, "tag_id": tag_id} for tag_id in distinct_ids],
            )

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """Remove the note and its tag associations. Unknown ids are a no-op."""
        await db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))
        await db.execute(delete(Note).where(Note.id == note_id))


note_queries = NoteQueries()
