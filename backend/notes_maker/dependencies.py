from __future__ import annotations

from fastapi import Depends, HTTPException, status

from notes_maker.config import settings
from notes_maker.core.prompts import NOTE_TAKER_SYSTEM_INSTRUCTION
from notes_maker.core.repositories.implementations.supabase.note_repository import (
    SupabaseNoteRepository,
)
from notes_maker.core.repositories.note_repository import NoteRepository  # noqa: TCH001
from notes_maker.core.services.generation_service import OpenAITextGenerator, TextGenerator
from notes_maker.core.services.note_generation_service import NoteGenerationService
from notes_maker.core.services.note_service import NoteService
from notes_maker.db.base import get_supabase_client
from notes_maker.utils.logging import get_logger
from notes_maker.utils.openai_client import get_openai_client

logger = get_logger(__name__)


def get_optional_note_repository() -> NoteRepository | None:
    """Return the note repository, or None when no database is configured."""
    if not settings.database_configured:
        return None
    try:
        client = get_supabase_client()
    except Exception as err:
        logger.error("Failed to create Supabase client: %s", err, extra={"error_type": type(err).__name__})
        return None
    return SupabaseNoteRepository(client, table_name=settings.notes_table)


def get_note_repository(
    repo: NoteRepository | None = Depends(get_optional_note_repository),
) -> NoteRepository:
    """Repository for routes that cannot work without a database."""
    if repo is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not connected. Notes management unavailable.",
        )
    return repo


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    """Get a request-scoped note service instance."""
    return NoteService(repo)


def get_text_generator() -> TextGenerator:
    """Construct the OpenAI-backed generator with the shared client."""
    return OpenAITextGenerator(
        get_openai_client(),
        model=settings.generation_model,
        audio_model=settings.audio_model,
        system_instruction=NOTE_TAKER_SYSTEM_INSTRUCTION,
    )


def get_note_generation_service(
    generator: TextGenerator = Depends(get_text_generator),
    repo: NoteRepository | None = Depends(get_optional_note_repository),
) -> NoteGenerationService:
    """Get a request-scoped note generation service; saving is skipped without a database."""
    return NoteGenerationService(generator, repo, model_name=settings.generation_model)
