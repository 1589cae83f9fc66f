"""
Noteful Backend — Folder & Tag Route Handlers
==============================================

What:  CRUD endpoints for /api/folders and /api/tags.
How:   Both resources have the same shape (id + unique name), so one builder
       produces a router per resource around its service.

Endpoints (per resource):
    GET    /api/{resource}s         list, ordered by id
    GET    /api/{resource}s/{id}    single item (404 when absent)
    POST   /api/{resource}s         create (201 + Location; 400 on duplicate name)
    PUT    /api/{resource}s/{id}    rename (404 when absent)
    DELETE /api/{resource}s/{id}    delete (204, also when absent)
"""

from typing import List, Type

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.catalog import FolderResponse, NameCreate, TagResponse
from noteful.schemas.common import ErrorResponse
from noteful.services.catalog_service import (
    NamedResourceService,
    folder_service,
    tag_service,
)


def build_catalog_router(
    service: NamedResourceService,
    response_model: Type[BaseModel],
) -> APIRouter:
    resource = service.resource
    router = APIRouter(prefix=f"/api/{resource}s", tags=[f"{resource.capitalize()}s"])
    get_route = f"get_{resource}"
    errors = {
        400: {"description": "Missing or duplicate name", "model": ErrorResponse},
        404: {"description": f"{resource.capitalize()} not found", "model": ErrorResponse},
    }

    @router.get("", response_model=List[response_model], name=f"list_{resource}s")
    async def list_items(db: AsyncSession = Depends(get_db_session)):
        return await service.list_all(db)

    @router.get("/{item_id}", response_model=response_model, responses=errors, name=get_route)
    async def get_item(item_id: int, db: AsyncSession = Depends(get_db_session)):
        return await service.get(db, item_id)

    @router.post(
        "", status_code=201, response_model=response_model, responses=errors,
        name=f"create_{resource}",
    )
    async def create_item(
        payload: NameCreate,
        request: Request,
        response: Response,
        db: AsyncSession = Depends(get_db_session),
    ):
        item = await service.create(db, payload)
        response.headers["Location"] = str(request.url_for(get_route, item_id=item.id))
        return item

    @router.put(
        "/{item_id}", response_model=response_model, responses=errors,
        name=f"update_{resource}",
    )
    async def update_item(
        item_id: int,
        payload: NameCreate,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.update(db, item_id, payload)

    @router.delete(
        "/{item_id}", status_code=204, response_class=Response,
        name=f"delete_{resource}",
    )
    async def delete_item(item_id: int, db: AsyncSession = Depends(get_db_session)):
        await service.delete(db, item_id)
        return Response(status_code=204)

    return router


folders_router = build_catalog_router(folder_service, FolderResponse)
tags_router = build_catalog_router(tag_service, TagResponse)
