from typing import Annotated

from fastapi import APIRouter, Query, Response
from pydantic import BaseModel, Field

from notebox.core.modules.note.models import Note
from notebox.core.modules.note.validators import TITLE_MAX_LENGTH
from notebox.core.pagination import PaginationResult
from notebox.web.deps import AppDep, AuthContextDep
from notebox.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])

NOT_FOUND_RESPONSE = {"model": ErrorResponse, "description": "Note not found"}
UNAUTHORIZED_RESPONSE = {"model": ErrorResponse, "description": "Unauthorized - no valid session"}


class CreateNoteRequest(BaseModel):
    """Data for creating a new note."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, examples=["My First Note"])
    content: str = Field(..., description="Note content (supports markdown)")


class UpdateNoteRequest(BaseModel):
    """Data for updating an existing note (all fields optional)."""

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = None


class NoteResponse(BaseModel):
    note: Note


class NoteListResponse(BaseModel):
    """A page of notes. Callers that ignore paging read `notes` and get the first page."""

    notes: list[Note]
    total: int
    limit: int
    offset: int
    has_more: bool
    total_pages: int

    @classmethod
    def from_page(cls, page: PaginationResult[Note]) -> "NoteListResponse":
        return cls(
            notes=page.items,
            total=page.total,
            limit=page.limit,
            offset=page.offset,
            has_more=page.has_more,
            total_pages=page.total_pages,
        )


@router.get(
    "/notes",
    summary="List notes",
    description="Get a page of the current user's notes, most recently updated first.",
    operation_id="listNotes",
    responses={401: UNAUTHORIZED_RESPONSE},
)
async def list_notes(
    app: AppDep,
    ctx: AuthContextDep,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> NoteListResponse:
    return NoteListResponse.from_page(await app.get_notes(ctx, limit, offset))


@router.post(
    "/notes",
    summary="Create note",
    operation_id="createNote",
    status_code=201,
    responses={400: {"model": ErrorResponse, "description": "Invalid input"}, 401: UNAUTHORIZED_RESPONSE},
)
async def create_note(body: CreateNoteRequest, app: AppDep, ctx: AuthContextDep) -> NoteResponse:
    return NoteResponse(note=await app.create_note(ctx, body.title, body.content))


@router.get(
    "/notes/{note_id}",
    summary="Get note",
    operation_id="getNote",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def get_note(note_id: str, app: AppDep, ctx: AuthContextDep) -> NoteResponse:
    return NoteResponse(note=await app.get_note(ctx, note_id))


@router.patch(
    "/notes/{note_id}",
    summary="Update note",
    description="Partially update a note. Omitted fields keep their values.",
    operation_id="updateNote",
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def update_note(note_id: str, body: UpdateNoteRequest, app: AppDep, ctx: AuthContextDep) -> NoteResponse:
    return NoteResponse(note=await app.update_note(ctx, note_id, body.title, body.content))


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    operation_id="deleteNote",
    status_code=204,
    responses={401: UNAUTHORIZED_RESPONSE, 404: NOT_FOUND_RESPONSE},
)
async def delete_note(note_id: str, app: AppDep, ctx: AuthContextDep) -> Response:
    await app.delete_note(ctx, note_id)
    return Response(status_code=204)
