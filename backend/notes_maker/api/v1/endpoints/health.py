from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notes_maker.config import settings
from notes_maker.core.repositories.note_repository import NoteRepository  # noqa: TCH001
from notes_maker.dependencies import get_optional_note_repository

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notes-maker-api",
            "version": "0.1.0",
            "timestamp": datetime.now(UTC).isoformat(),
        }
    )


@router.get("/db-status")
async def database_status(repo: NoteRepository | None = Depends(get_optional_note_repository)):
    """Report whether notes can be persisted right now."""
    connected = False
    error: str | None = None
    if repo is not None:
        try:
            await repo.ping()
            connected = True
        except Exception as e:
            error = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "database_connected": connected,
            "database_configured": settings.database_configured,
            "error": error,
            "generation_model": settings.generation_model,
            "timestamp": datetime.now(UTC).isoformat(),
        }
    )
