# Importing the modules registers every table on Base.metadata
from noteful.models.folder import Folder
from noteful.models.tag import Tag
from noteful.models.note import Note, notes_tags

__all__ = ["Folder", "Tag", "Note", "notes_tags"]
