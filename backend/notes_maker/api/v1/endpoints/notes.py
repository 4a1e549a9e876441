from __future__ import annotations

from datetime import date  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from notes_maker.api.v1.schemas.note import (
    NoteListResponse,
    NoteMutationResponse,
    NoteRead,
    NoteUpdate,
    PaginationRead,
)
from notes_maker.core.models.note import InputType, Subject  # noqa: TCH001
from notes_maker.core.schemas.note_filters import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    NoteListFilters,
    NoteSortField,
    SortDirection,
)
from notes_maker.core.services.note_service import NoteService  # noqa: TCH001
from notes_maker.dependencies import get_note_service

router = APIRouter()


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    search: str | None = Query(default=None, max_length=200),
    input_type: InputType | None = Query(default=None, alias="inputType"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    language: str | None = Query(default=None, max_length=100),
    subject: Subject | None = Query(default=None),
    sort: SortDirection = Query(default=SortDirection.DESC),
    sort_by: NoteSortField = Query(default=NoteSortField.CREATED_AT, alias="sortBy"),
    service: NoteService = Depends(get_note_service),
):
    """List notes, newest first by default.

    Query names follow the browser client (`inputType`, `startDate`,
    `endDate`, `sortBy`).
    """
    try:
        filters = NoteListFilters(
            page=page,
            limit=limit,
            search=search,
            input_type=input_type,
            language=language,
            subject=subject,
            start_date=start_date,
            end_date=end_date,
            sort_by=sort_by,
            sort=sort,
        )
    except ValidationError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=err.errors()[0]["msg"]) from err

    result = await service.list_notes(filters)
    return NoteListResponse(
        notes=[NoteRead.from_note(n) for n in result.notes],
        pagination=PaginationRead.model_validate(result.pagination.model_dump()),
        applied_filters=result.applied_filters,
    )


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: UUID,
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead.from_note(note)


@router.put("/{note_id}", response_model=NoteMutationResponse)
async def update_note(
    note_id: UUID,
    payload: NoteUpdate,
    service: NoteService = Depends(get_note_service),
):
    """Replace the generated notes of a stored note."""
    try:
        note = await service.update_generated_notes(note_id, payload.generated_notes)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteMutationResponse(message="Note updated", note=NoteRead.from_note(note))


@router.delete("/{note_id}", response_model=NoteMutationResponse)
async def delete_note(
    note_id: UUID,
    service: NoteService = Depends(get_note_service),
):
    deleted = await service.delete_note(note_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteMutationResponse(message="Note deleted")
