from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from notes_maker.core.models.base import AppBaseModel
from notes_maker.core.models.note import InputType, Subject  # noqa: TCH001


class GenerateNotesResponse(AppBaseModel):
    """Response of POST /generate-notes (snake_case keys)."""

    status: str = "success"
    input_type: InputType
    model_used: str
    detected_language: str
    detected_subject: Subject
    generated_notes: str
    note_id: UUID | None = None
    saved_at: datetime | None = None
    save_error: str | None = None
    database_status: str | None = None


class SubjectRead(AppBaseModel):
    subject: Subject
    description: str
