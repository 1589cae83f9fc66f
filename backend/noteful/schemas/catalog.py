"""
Noteful Backend — Folder and Tag Schemas
=========================================

Folders and tags share one shape: an id and a unique, non-empty name.
"""

from pydantic import Field

from noteful.schemas.note import CamelModel, TagResponse


class NameCreate(CamelModel):
    """Body of POST/PUT for /api/folders and /api/tags."""
    name: str = Field(min_length=1, max_length=255, description="Unique, non-empty name")


class FolderResponse(CamelModel):
    id: int = Field(description="Folder identifier")
    name: str = Field(description="Folder name")


FolderCreate = NameCreate
TagCreate = NameCreate

__all__ = ["NameCreate", "FolderCreate", "TagCreate", "FolderResponse", "TagResponse"]
