from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from notes_maker.core.schemas.note_filters import NotePage, PaginationInfo
from notes_maker.utils.logging import get_logger

if TYPE_CHECKING:
    from notes_maker.core.models.note import Note
    from notes_maker.core.repositories.note_repository import NoteRepository
    from notes_maker.core.schemas.note_filters import NoteListFilters

logger = get_logger(__name__)


class NoteService:
    """Browse, edit and delete stored notes."""

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def list_notes(self, filters: NoteListFilters) -> NotePage:
        """Return one page of notes with pagination metadata."""
        notes, total = await self._repo.search(filters)
        logger.debug("Listed %d of %d notes", len(notes), total, extra={"filters": filters.applied()})
        return NotePage(
            notes=list(notes),
            pagination=PaginationInfo.build(page=filters.page, limit=filters.limit, total_count=total),
            applied_filters=filters.applied(),
        )

    async def get_note(self, note_id: str | UUID) -> Note | None:
        try:
            note_uuid = UUID(str(note_id))
        except ValueError:
            return None
        return await self._repo.get(note_uuid)

    async def update_generated_notes(self, note_id: str | UUID, generated_notes: str) -> Note | None:
        """Replace the generated notes text, the only user-editable field.

        Returns None when the note does not exist.
        """
        text = (generated_notes or "").strip()
        if not text:
            raise ValueError("generated_notes must be provided and non-empty")

        existing = await self.get_note(note_id)
        if not existing:
            return None
        if existing.generated_notes == text:
            return existing
        return await self._repo.update_fields(existing.id, {"generated_notes": text})

    async def delete_note(self, note_id: str | UUID) -> bool:
        note = await self.get_note(note_id)
        if not note:
            return False
        return await self._repo.delete(note.id)
