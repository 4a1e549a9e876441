from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import UUID  # noqa: TCH003

from pydantic import Field, computed_field, field_validator

from notes_maker.core.models.base import CamelModel
from notes_maker.core.models.note import InputType, Note, Subject  # noqa: TCH001


class NoteRead(CamelModel):
    id: UUID
    input_type: InputType
    generated_notes: str
    detected_language: str
    detected_subject: Subject
    original_content: str
    created_at: datetime
    updated_at: datetime | None

    @computed_field(alias="_id")
    @property
    def record_id(self) -> UUID:
        """Copy of `id` under the key the notes browser reads."""
        return self.id

    @classmethod
    def from_note(cls, note: Note) -> NoteRead:
        return cls.model_validate(note.model_dump())


class NoteUpdate(CamelModel):
    generated_notes: str = Field(min_length=1, description="Edited markdown notes")

    @field_validator("generated_notes")
    @classmethod
    def validate_generated_notes(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("generatedNotes must be non-empty")
        return stripped


class PaginationRead(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class NoteListResponse(CamelModel):
    """Listing envelope in the shape the notes browser expects."""

    status: str = "success"
    notes: list[NoteRead]
    pagination: PaginationRead
    applied_filters: dict[str, str] = Field(default_factory=dict)


class NoteMutationResponse(CamelModel):
    status: str = "success"
    message: str
    note: NoteRead | None = None
