from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

import pytest

# Settings are read at import time
os.environ.setdefault("APP_OPENAI_API_KEY", "test-key")
os.environ.pop("APP_SUPABASE_URL", None)
os.environ.pop("APP_SUPABASE_SERVICE_ROLE_KEY", None)

from notes_maker.core.repositories.note_repository import NoteRepository  # noqa: E402
from notes_maker.core.schemas.note_filters import NoteSortField, SortDirection  # noqa: E402

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from notes_maker.core.models.note import Note
    from notes_maker.core.schemas.note_filters import NoteListFilters
    from notes_maker.core.services.generation_service import GenerationOptions, PromptPart


@dataclass
class GeneratorCall:
    kind: str
    parts: list[PromptPart]
    options: GenerationOptions

    @property
    def prompt(self) -> str:
        return self.parts[0].text or ""


class ScriptedGenerator:
    """Deterministic TextGenerator answering by prompt kind.

    Each script is a single answer or a list consumed call by call (the last
    entry repeats). An exception instance is raised instead of returned. A
    `correction` of None echoes the notes back unchanged.
    """

    def __init__(
        self,
        *,
        language: Any = "Hindi",
        subject: Any = "Physics",
        notes: Any = "# Lecture notes",
        correction: Any = None,
    ) -> None:
        self._scripts: dict[str, list[Any]] = {
            "language": self._as_list(language),
            "subject": self._as_list(subject),
            "notes": self._as_list(notes),
            "correction": self._as_list(correction),
        }
        self.calls: list[GeneratorCall] = []

    @staticmethod
    def _as_list(value: Any) -> list[Any]:
        return list(value) if isinstance(value, list) else [value]

    @staticmethod
    def _kind(parts: Sequence[PromptPart]) -> str:
        text = parts[0].text or ""
        if text.startswith("Identify the language"):
            return "language"
        if text.startswith("Analyze this text"):
            return "subject"
        if "URGENT LANGUAGE CORRECTION" in text:
            return "correction"
        return "notes"

    @property
    def kinds(self) -> list[str]:
        return [c.kind for c in self.calls]

    def calls_of(self, kind: str) -> list[GeneratorCall]:
        return [c for c in self.calls if c.kind == kind]

    async def generate(self, parts: Sequence[PromptPart], options: GenerationOptions) -> str:
        kind = self._kind(parts)
        self.calls.append(GeneratorCall(kind=kind, parts=list(parts), options=options))
        script = self._scripts[kind]
        answer = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(answer, BaseException):
            raise answer
        if kind == "correction" and answer is None:
            prompt = parts[0].text or ""
            return prompt.split('Original text to correct:\n"', 1)[1].rsplit('"\n\nReturn ONLY', 1)[0]
        return answer


class InMemoryNoteRepository(NoteRepository):
    """Dict-backed repository mirroring the Supabase filter semantics."""

    def __init__(self) -> None:
        self.notes: dict[UUID, Note] = {}
        self.fail_on_create: Exception | None = None

    async def create(self, note: Note) -> Note:
        if self.fail_on_create is not None:
            raise self.fail_on_create
        self.notes[note.id] = note
        return note

    async def get(self, note_id: UUID) -> Note | None:
        return self.notes.get(note_id)

    async def search(self, filters: NoteListFilters) -> tuple[Sequence[Note], int]:
        matches = list(self.notes.values())
        if filters.search:
            term = filters.search.lower()
            matches = [
                n for n in matches
                if term in n.generated_notes.lower() or term in n.original_content.lower()
            ]
        if filters.input_type is not None:
            matches = [n for n in matches if n.input_type == filters.input_type]
        if filters.language:
            matches = [n for n in matches if n.detected_language.lower() == filters.language.lower()]
        if filters.subject is not None:
            matches = [n for n in matches if n.detected_subject == filters.subject]
        if filters.start_date:
            start = datetime.combine(filters.start_date, time.min, tzinfo=UTC)
            matches = [n for n in matches if n.created_at >= start]
        if filters.end_date:
            end = datetime.combine(filters.end_date + timedelta(days=1), time.min, tzinfo=UTC)
            matches = [n for n in matches if n.created_at < end]

        def _key(n: Note) -> Any:
            if filters.sort_by == NoteSortField.UPDATED_AT:
                return n.updated_at or n.created_at
            if filters.sort_by == NoteSortField.DETECTED_LANGUAGE:
                return n.detected_language
            if filters.sort_by == NoteSortField.DETECTED_SUBJECT:
                return n.detected_subject.value
            return n.created_at

        matches.sort(key=_key, reverse=filters.sort == SortDirection.DESC)
        return matches[filters.offset:filters.offset + filters.limit], len(matches)

    async def update_fields(self, note_id: UUID, changes: dict) -> Note | None:
        note = self.notes.get(note_id)
        if note is None:
            return None
        updated = note.model_copy(update={**changes, "updated_at": datetime.now(UTC)})
        self.notes[note_id] = updated
        return updated

    async def delete(self, note_id: UUID) -> bool:
        return self.notes.pop(note_id, None) is not None

    async def ping(self) -> None:
        return None


@pytest.fixture()
def generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture()
def repository() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture()
def make_generator():
    return ScriptedGenerator
