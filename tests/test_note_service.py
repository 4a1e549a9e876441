from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

import pytest

from notes_maker.core.models.note import InputType, Note, Subject
from notes_maker.core.schemas.note_filters import NoteListFilters, PaginationInfo
from notes_maker.core.services.note_service import NoteService

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def _note(day_offset: int = 0, **overrides) -> Note:
    fields = {
        "input_type": InputType.TEXT,
        "generated_notes": f"# Notes {day_offset}",
        "detected_language": "English",
        "detected_subject": Subject.PHYSICS,
        "original_content": "lecture text",
        "created_at": NOW - timedelta(days=day_offset),
    }
    fields.update(overrides)
    return Note(**fields)


@pytest.fixture()
def service(repository) -> NoteService:
    return NoteService(repository)


async def _seed(repository, *notes: Note) -> None:
    for note in notes:
        await repository.create(note)


def test_pagination_info_math():
    info = PaginationInfo.build(page=2, limit=10, total_count=25)
    assert info.total_pages == 3
    assert info.has_next_page and info.has_prev_page

    empty = PaginationInfo.build(page=1, limit=10, total_count=0)
    assert empty.total_pages == 0
    assert not empty.has_next_page and not empty.has_prev_page


async def test_list_notes_pages_newest_first(service, repository):
    await _seed(repository, *[_note(i) for i in range(12)])

    first = await service.list_notes(NoteListFilters(limit=5))
    last = await service.list_notes(NoteListFilters(page=3, limit=5))

    assert [n.generated_notes for n in first.notes] == [f"# Notes {i}" for i in range(5)]
    assert first.pagination.total_count == 12
    assert first.pagination.total_pages == 3
    assert first.pagination.has_next_page is True
    assert len(last.notes) == 2
    assert last.pagination.has_next_page is False


async def test_list_notes_filters_and_echoes_them(service, repository):
    await _seed(
        repository,
        _note(0, detected_subject=Subject.MATHEMATICS, detected_language="Kannada"),
        _note(1, detected_subject=Subject.MATHEMATICS, detected_language="English"),
        _note(2, detected_subject=Subject.HISTORY, detected_language="Kannada"),
    )

    page = await service.list_notes(NoteListFilters(subject=Subject.MATHEMATICS, language="kannada"))

    assert len(page.notes) == 1
    assert page.notes[0].detected_language == "Kannada"
    assert page.applied_filters["subject"] == "Mathematics"
    assert page.applied_filters["language"] == "kannada"
    assert page.applied_filters["sortBy"] == "created_at"


async def test_list_notes_date_range_is_inclusive(service, repository):
    await _seed(repository, _note(0), _note(1), _note(5))

    page = await service.list_notes(
        NoteListFilters(start_date=date(2024, 3, 14), end_date=date(2024, 3, 15))
    )

    assert page.pagination.total_count == 2


def test_filters_reject_inverted_date_range():
    with pytest.raises(ValueError):
        NoteListFilters(start_date=date(2024, 3, 15), end_date=date(2024, 3, 1))


async def test_update_generated_notes(service, repository):
    note = _note()
    await _seed(repository, note)

    updated = await service.update_generated_notes(note.id, "  # Edited  ")

    assert updated is not None
    assert updated.generated_notes == "# Edited"
    assert updated.updated_at is not None
    assert updated.detected_subject is Subject.PHYSICS


async def test_update_rejects_blank_text(service, repository):
    note = _note()
    await _seed(repository, note)

    with pytest.raises(ValueError):
        await service.update_generated_notes(note.id, "   ")


async def test_update_missing_note_returns_none(service):
    assert await service.update_generated_notes(uuid4(), "# Edited") is None


async def test_get_note_with_malformed_id(service):
    assert await service.get_note("not-a-uuid") is None


async def test_delete_note(service, repository):
    note = _note()
    await _seed(repository, note)

    assert await service.delete_note(str(note.id)) is True
    assert await service.delete_note(note.id) is False
    assert repository.notes == {}
