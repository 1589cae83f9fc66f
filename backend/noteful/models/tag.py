"""
Noteful Backend — Tag SQLAlchemy Model
=======================================

Tags attach to notes through the `notes_tags` association table
(see noteful.models.note).
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
