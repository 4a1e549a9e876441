from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_maker.core.models.note import Note
    from notes_maker.core.schemas.note_filters import NoteListFilters


class NoteRepository(ABC):
    """Abstract repository interface for generated notes.

    Contract used by services and dependency injection. Implementations should
    perform I/O (database, network) and therefore expose async methods.
    """

    @abstractmethod
    async def create(self, note: Note) -> Note:  # pragma: no cover - interface only
        """Persist a new note and return the stored entity."""

    @abstractmethod
    async def get(self, note_id: UUID) -> Note | None:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def search(self, filters: NoteListFilters) -> tuple[Sequence[Note], int]:  # pragma: no cover
        """Return one page of notes matching the filters and the total match count.

        Args:
            filters: Search text, facet filters, date range, sorting and paging
        """

    @abstractmethod
    async def update_fields(self, note_id: UUID, changes: dict) -> Note | None:  # pragma: no cover
        """Partially update fields on a note and return the updated entity, or None if missing."""

    @abstractmethod
    async def delete(self, note_id: UUID) -> bool:  # pragma: no cover
        """Delete a note by id. Return True if a row was removed, False otherwise."""

    async def ping(self) -> None:  # pragma: no cover - optional
        """Raise if the backing store is unreachable."""
