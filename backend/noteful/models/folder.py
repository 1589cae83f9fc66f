"""
Noteful Backend — Folder SQLAlchemy Model
==========================================

A note lives in at most one folder; a folder holds any number of notes.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Folder(Base):
    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
