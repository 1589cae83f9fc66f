"""
Noteful Backend — Note Request/Response Schemas
================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against NoteCreate / NoteUpdate before
       any store interaction, and serializes NoteResponse on the way out.

Wire format is camelCase (folderId, createdAt, searchTerm); Python code uses
snake_case field names. `populate_by_name` lets both work on input.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_serializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models exchanged in camelCase."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class TagResponse(CamelModel):
    """A tag as embedded in a hydrated note, and as returned by /api/tags."""
    id: int = Field(description="Tag identifier")
    name: str = Field(description="Tag name")


class NoteResponse(CamelModel):
    """
    What:  A hydrated note: scalar fields, folder reference and tag list.
    Who:   Returned by every notes endpoint that yields note data.

    Shape rules:
        - folderId/folderName are left out entirely when the note has no folder
        - tags is always present; [] when the note has none
    """
    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    folder_id: Optional[int] = Field(default=None, description="Folder the note is filed in")
    folder_name: Optional[str] = Field(default=None, description="Name of that folder")
    tags: List[TagResponse] = Field(default_factory=list, description="Tags on the note")

    @model_serializer(mode="wrap")
    def _omit_missing_folder(self, handler):
        data = handler(self)
        if self.folder_id is None:
            for key in ("folderId", "folder_id", "folderName", "folder_name"):
                data.pop(key, None)
        return data


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(CamelModel):
    """
    Body of POST /api/notes.

    Required:
        title: 1 to 255 characters; a missing or "" title is rejected with 400,
               and so is one longer than the column allows
    Optional:
        content, folderId, tags (list of tag ids; null or omitted means none)
    """
    title: str = Field(
        min_length=1, max_length=255, description="Note title (required, non-empty)"
    )
    content: Optional[str] = Field(default=None, description="Note body")
    folder_id: Optional[int] = Field(default=None, description="Folder to file the note in")
    tags: List[int] = Field(default_factory=list, description="Tag ids to attach")

    @field_validator("tags", mode="before")
    @classmethod
    def default_missing_tags(cls, v: Any) -> Any:
        """`tags: null` is treated like an omitted field."""
        return [] if v is None else v


class NoteUpdate(NoteCreate):
    """
    Body of PUT /api/notes/{id}.

    title is required. content and folderId are written only when present in
    the body (folderId: null detaches the note from its folder). tags always
    replaces the whole tag set; omitting it clears the note's tags.
    """

    def scalar_updates(self) -> Dict[str, Any]:
        """Column values to write, limited to the fields the client sent."""
        updates: Dict[str, Any] = {"title": self.title}
        if "content" in self.model_fields_set:
            updates["content"] = self.content
        if "folder_id" in self.model_fields_set:
            updates["folder_id"] = self.folder_id
        return updates


class NoteFilterParams(CamelModel):
    """
    Optional filters for GET /api/notes, AND-combined.

    search_term: case-insensitive substring of the title (content is not searched)
    folder_id:   exact folder match
    tag_id:      notes carrying this tag (all of their tags are still returned)
    """
    search_term: Optional[str] = None
    folder_id: Optional[int] = None
    tag_id: Optional[int] = None

    @field_validator("folder_id", "tag_id", mode="before")
    @classmethod
    def blank_means_no_filter(cls, v: Any) -> Any:
        """`?folderId=` is the same as leaving the parameter out."""
        if isinstance(v, str) and not v.strip():
            return None
        return v
