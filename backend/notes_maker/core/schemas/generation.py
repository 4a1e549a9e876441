from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, model_validator

from notes_maker.core.models.base import AppBaseModel
from notes_maker.core.models.note import InputType, Subject  # noqa: TCH001


class AudioUpload(AppBaseModel):
    """Raw audio received with a generation request."""

    filename: str | None = None
    mime_type: str
    data: bytes = Field(repr=False)


class NoteGenerationRequest(AppBaseModel):
    """Input to note generation: text, a transcript, or an audio file."""

    input_type: InputType
    text: str | None = None
    audio: AudioUpload | None = None

    @model_validator(mode="after")
    def validate_content(self) -> NoteGenerationRequest:
        if self.text is not None and not self.text.strip():
            self.text = None
        if self.text is None and self.audio is None:
            raise ValueError("Either text content or an audio file must be provided")
        if self.text is not None and self.audio is not None:
            raise ValueError("Provide text content or an audio file, not both")
        if self.input_type == InputType.TEXT and self.audio is not None:
            raise ValueError("Audio files require input type 'audio'")
        return self


class GenerationOutcome(AppBaseModel):
    """Result of one generation request, saved or not."""

    input_type: InputType
    model_used: str
    detected_language: str
    detected_subject: Subject
    generated_notes: str
    note_id: UUID | None = None
    saved_at: datetime | None = None
    save_error: str | None = None
    database_status: str | None = None
