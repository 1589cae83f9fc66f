"""
Noteful Backend — Folder & Tag Service
=======================================

What:  CRUD for the two named resources notes refer to: folders and tags.
How:   One base class parameterized by ORM model; subclasses only differ in how
       notes are detached before a delete.

Delete semantics:
    - Folder: notes filed in it stay, with folder_id set to NULL
    - Tag:    its notes_tags rows go; the notes themselves stay
    Both are idempotent (unknown id → success), like note deletion.

Names are unique per resource; a duplicate is a ValidationError (400).
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, List, Type, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models import Folder, Note, Tag, notes_tags
from noteful.schemas.catalog import NameCreate

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Folder, Tag)


class NamedResourceService(ABC, Generic[ModelT]):
    """Shared list/get/create/update/delete for id + unique name resources."""

    model: Type[ModelT]
    resource: str

    async def list_all(self, db: AsyncSession) -> List[ModelT]:
        try:
            result = await db.execute(select(self.model).order_by(self.model.id))
        except SQLAlchemyError as e:
            raise self._store_error("list", e) from e
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, entity_id: int) -> ModelT:
        try:
            entity = await db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise self._store_error("get", e) from e
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        return entity

    async def create(self, db: AsyncSession, payload: NameCreate) -> ModelT:
        entity = self.model(name=payload.name)
        db.add(entity)
        await self._flush(db, payload.name)
        logger.info("%s %s created: %r", self.resource, entity.id, entity.name)
        return entity

    async def update(self, db: AsyncSession, entity_id: int, payload: NameCreate) -> ModelT:
        entity = await self.get(db, entity_id)
        entity.name = payload.name
        await self._flush(db, payload.name)
        return entity

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        try:
            await self._detach(db, entity_id)
            await db.execute(delete(self.model).where(self.model.id == entity_id))
        except SQLAlchemyError as e:
            raise self._store_error("delete", e) from e
        logger.info("%s %s deleted", self.resource, entity_id)

    @abstractmethod
    async def _detach(self, db: AsyncSession, entity_id: int) -> None:
        """Release references from notes before the row is deleted."""

    async def _flush(self, db: AsyncSession, name: str) -> None:
        try:
            await db.flush()
        except IntegrityError as e:
            raise ValidationError(
                message=f"{self.resource.capitalize()} name already exists",
                field="name",
                context={"name": name},
            ) from e
        except SQLAlchemyError as e:
            raise self._store_error("save", e) from e

    def _store_error(self, action: str, e: SQLAlchemyError) -> DatabaseError:
        logger.error("Database error on %s %s: %s", self.resource, action, str(e))
        return DatabaseError(
            message=f"Could not {action} {self.resource}. Please try again.",
            context={"error_type": type(e).__name__},
        )


class FolderService(NamedResourceService[Folder]):
    model = Folder
    resource = "folder"

    async def _detach(self, db: AsyncSession, entity_id: int) -> None:
        await db.execute(
            update(Note).where(Note.folder_id == entity_id).values(folder_id=None)
        )


class TagService(NamedResourceService[Tag]):
    model = Tag
    resource = "tag"

    async def _detach(self, db: AsyncSession, entity_id: int) -> None:
        await db.execute(delete(notes_tags).where(notes_tags.c.tag_id == entity_id))


folder_service = FolderService()
tag_service = TagService()

