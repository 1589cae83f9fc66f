"""
Noteful Backend — Note SQLAlchemy Model
========================================

What:  ORM model for the `notes` table and the `notes_tags` association table.
Who:   Used by the Query Layer (note_queries) and by Alembic.

Table Design Rationale:
    - Integer primary key assigned by the store (SERIAL / AUTOINCREMENT)
    - folder_id: nullable FK; deleting a folder detaches its notes (SET NULL)
    - created: UTC with timezone, exposed as `createdAt` in the API
    - notes_tags: pure association (note_id, tag_id), composite primary key so
      a note can never carry the same tag twice
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


# ── Association Table ─────────────────────────────────────────────────────
# One row per note↔tag edge; no identity beyond the pair.
notes_tags = Table(
    "notes_tags",
    Base.metadata,
    Column(
        "note_id",
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Many-to-many edges between notes and tags",
)


class Note(Base):
    """
    A note, optionally filed in one folder and carrying zero or more tags.

    Query Patterns:
        - List/search: LEFT JOIN folders, notes_tags, tags ORDER BY notes.id
        - Filter by folder: WHERE folder_id = :id (idx_notes_folder_id)
        - Single note: same join WHERE notes.id = :id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Required, non-empty note title",
    )

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    folder_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    # Column is named `created` in the store; attribute follows Python naming
    created_at: Mapped[datetime] = mapped_column(
        "created",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_folder_id", "folder_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
