from __future__ import annotations

import asyncio
import re
from datetime import UTC, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from notes_maker.core.models.note import Note
from notes_maker.core.repositories.note_repository import NoteRepository
from notes_maker.core.schemas.note_filters import SortDirection
from notes_maker.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from supabase import Client

    from notes_maker.core.schemas.note_filters import NoteListFilters

# Characters with meaning inside a PostgREST `or=(...)` filter
_FILTER_RESERVED_RE = re.compile(r"[,()\"\\%*]")


class SupabaseNoteRepository(NoteRepository):
    """Supabase implementation of the NoteRepository.

    Uses Supabase's PostgREST client for CRUD against a `notes` table whose
    columns match the `Note` model fields. Listing asks PostgREST for an exact
    count so pagination metadata can be computed in one round trip.
    """

    SEARCH_COLUMNS = ("generated_notes", "original_content")
    IMMUTABLE_FIELDS = {"id", "created_at", "updated_at"}

    def __init__(self, client: Client, table_name: str = "notes") -> None:
        self._client: Client = client
        self._table = table_name

    async def create(self, note: Note) -> Note:
        row = self._note_to_row(note)
        resp = await self._run(
            lambda: self._client.table(self._table)
            .insert(row)
            .execute()
        )
        data = self._first(resp.data)
        if not data:
            # Insert without representation; fall back to what was sent
            return note
        return self._row_to_note(data)

    async def get(self, note_id: UUID) -> Note | None:
        resp = await self._run(
            lambda: self._client.table(self._table)
            .select("*")
            .eq("id", str(note_id))
            .limit(1)
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_note(items[0])

    async def search(self, filters: NoteListFilters) -> tuple[Sequence[Note], int]:
        def _query():
            q = self._client.table(self._table).select("*", count="exact")
            if filters.search:
                term = _FILTER_RESERVED_RE.sub(" ", filters.search).strip()
                if term:
                    q = q.or_(",".join(f"{col}.ilike.%{term}%" for col in self.SEARCH_COLUMNS))
            if filters.input_type is not None:
                q = q.eq("input_type", filters.input_type.value)
            if filters.language:
                q = q.ilike("detected_language", filters.language)
            if filters.subject is not None:
                q = q.eq("detected_subject", filters.subject.value)
            if filters.start_date:
                q = q.gte("created_at", self._day_start(filters.start_date))
            if filters.end_date:
                # End date is inclusive of the whole day
                q = q.lt("created_at", self._day_start(filters.end_date + timedelta(days=1)))
            return (
                q
                .order(filters.sort_by.value, desc=filters.sort == SortDirection.DESC)
                .range(filters.offset, filters.offset + filters.limit - 1)
                .execute()
            )

        resp = await self._run(_query)
        items = resp.data or []
        total = resp.count if resp.count is not None else len(items)
        return [self._row_to_note(i) for i in items], total

    async def update_fields(self, note_id: UUID, changes: dict) -> Note | None:
        sanitized: dict[str, Any] = {k: v for k, v in (changes or {}).items() if k not in self.IMMUTABLE_FIELDS}
        if not sanitized:
            return await self.get(note_id)

        sanitized["updated_at"] = datetime.now(UTC).isoformat()
        resp = await self._run(
            lambda: self._client.table(self._table)
            .update(sanitized)
            .eq("id", str(note_id))
            .execute()
        )
        items = resp.data or []
        if not items:
            return None
        return self._row_to_note(items[0])

    async def delete(self, note_id: UUID) -> bool:
        resp = await self._run(
            lambda: self._client.table(self._table)
            .delete()
            .eq("id", str(note_id))
            .execute()
        )
        items = resp.data or []
        return len(items) > 0

    async def ping(self) -> None:
        await self._run(lambda: self._client.table(self._table).select("id").limit(1).execute())

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        return await asyncio.to_thread(func)

    @staticmethod
    def _first(data: Any) -> dict[str, Any]:
        if isinstance(data, list) and data:
            return data[0]
        if isinstance(data, dict):
            return data
        return {}

    @staticmethod
    def _day_start(day) -> str:
        return datetime.combine(day, time.min, tzinfo=UTC).isoformat()

    @staticmethod
    def _row_to_note(row: dict[str, Any]) -> Note:
        # Drop columns the table may carry that the model does not know
        known = set(Note.model_fields)
        normalized = {k: v for k, v in row.items() if k in known}
        return Note.model_validate(normalized)

    @staticmethod
    def _note_to_row(note: Note) -> dict[str, Any]:
        # PostgREST needs JSON-serializable values
        data = note.model_dump(mode="json")
        if data.get("updated_at") is None:
            data.pop("updated_at", None)
        return data
