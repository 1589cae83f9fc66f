"""
Noteful Backend — Notes Route Handlers
=======================================

What:  CRUD endpoints for notes under /api/notes.
How:   Extracts query/path/body parameters, delegates to NoteService, returns
       hydrated NoteResponse objects.

Endpoints:
    GET    /api/notes          list, filtered by searchTerm / folderId / tagId
    GET    /api/notes/{id}     single note (404 when absent)
    POST   /api/notes          create (201 + Location)
    PUT    /api/notes/{id}     replace scalars and tag set
    DELETE /api/notes/{id}     delete (204, also when absent)

Body validation (missing title, tags not a list) happens in the schemas and is
reported as 400 by the RequestValidationError handler in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import (
    NoteCreate,
    NoteFilterParams,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])


def parse_filters(
    search_term: str | None, folder_id: str | None, tag_id: str | None
) -> NoteFilterParams:
    """
    Validate the list filters, treating blank ids as absent.

    Bad values are re-raised as RequestValidationError so they get the same
    400 body as any other malformed request.
    """
    try:
        return NoteFilterParams.model_validate(
            {"searchTerm": search_term, "folderId": folder_id, "tagId": tag_id}
        )
    except PydanticValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("query", *err["loc"])} for err in e.errors(include_url=False)]
        ) from e


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "Invalid filter value", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List and search notes",
    description=(
        "Returns every note matching all supplied filters, each with its folder "
        "and its complete tag list. searchTerm is a case-insensitive title match."
    ),
)
async def list_notes(
    response: Response,
    search_term: str | None = Query(
        default=None, alias="searchTerm",
        description="Substring to look for in note titles (case-insensitive)",
    ),
    folder_id: str | None = Query(
        default=None, alias="folderId",
        description="Only notes filed in this folder",
    ),
    tag_id: str | None = Query(
        default=None, alias="tagId",
        description="Only notes carrying this tag (their other tags are still returned)",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    filters = parse_filters(search_term, folder_id, tag_id)
    notes = await note_service.list_notes(db, filters)

    response.headers["X-Total-Count"] = str(len(notes))
    return notes


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title or malformed tags", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note, optionally filed in a folder and tagged.

    Location points at GET /api/notes/{id} for the new note.
    """
    note = await note_service.create_note(db, payload)
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title or malformed tags", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note",
    description=(
        "Writes title plus any of content/folderId present in the body, and "
        "replaces the note's entire tag set with `tags` (omitted means none)."
    ),
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db, note_id, payload)


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db, note_id)
    return Response(status_code=204)
