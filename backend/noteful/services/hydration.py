"""
Noteful Backend — Note Hydration
=================================

What:  Folds the denormalized rows produced by the Query Layer back into one
       NoteResponse per note.
Why:   LEFT JOIN notes → notes_tags → tags fans out to one row per tag, with the
       note and folder columns repeated on every row. Clients want one object
       per note with a tag list.

Input row keys (see note_queries.HYDRATION_COLUMNS):
    id, title, content, created_at, folder_id, folder_name, tag_id, tag_name

Example:
    rows:
        (1, "Cats", ..., folder 2 "Pets", tag 5 "cute")
        (1, "Cats", ..., folder 2 "Pets", tag 7 "fluffy")
        (3, "Dogs", ..., no folder,       no tag)
    hydrated:
        [Note 1 {folder 2, tags [5, 7]}, Note 3 {no folder, tags []}]

Complexity: one pass over the rows; tag dedup uses a per-note id set.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from noteful.schemas.note import NoteResponse, TagResponse


class _NoteBuilder:
    """Accumulates a single note's scalar fields, folder and distinct tags."""

    def __init__(self, row: Mapping[str, Any]):
        self.fields: Dict[str, Any] = {
            "id": row["id"],
            "title": row["title"],
            "content": row["content"],
            "created_at": row["created_at"],
        }
        # First row wins for the folder too; it is identical on every row
        if row["folder_id"] is not None:
            self.fields["folder_id"] = row["folder_id"]
            self.fields["folder_name"] = row["folder_name"]
        self.tags: List[TagResponse] = []
        self._tag_ids: Set[int] = set()

    def add_tag(self, row: Mapping[str, Any]) -> None:
        tag_id = row["tag_id"]
        if tag_id is None or tag_id in self._tag_ids:
            return
        self._tag_ids.add(tag_id)
        self.tags.append(TagResponse(id=tag_id, name=row["tag_name"]))

    def build(self) -> NoteResponse:
        return NoteResponse(**self.fields, tags=self.tags)


def hydrate_notes(rows: Iterable[Mapping[str, Any]]) -> List[NoteResponse]:
    """
    Collapse joined rows into notes, in order of each note's first row.

    Args:
        rows: mappings carrying the hydration columns, any number per note

    Returns:
        One NoteResponse per distinct note id, tags deduplicated by id
    """
    builders: Dict[int, _NoteBuilder] = {}
    for row in rows:
        builder = builders.get(row["id"])
        if builder is None:
            builder = builders[row["id"]] = _NoteBuilder(row)
        builder.add_tag(row)
    return [builder.build() for builder in builders.values()]


def hydrate_note(rows: Iterable[Mapping[str, Any]]) -> Optional[NoteResponse]:
    """
    Hydrate the rows of a single-note lookup.

    Returns None when there are no rows at all ("no such note"); a note without
    tags still has one row and hydrates with tags == [].
    """
    notes = hydrate_notes(rows)
    return notes[0] if notes else None
