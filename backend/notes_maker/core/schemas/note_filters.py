from __future__ import annotations

import math
from datetime import date  # noqa: TCH003
from enum import Enum

from pydantic import Field, field_validator, model_validator

from notes_maker.core.models.base import AppBaseModel
from notes_maker.core.models.note import InputType, Note, Subject  # noqa: TCH001

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class NoteSortField(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    DETECTED_LANGUAGE = "detected_language"
    DETECTED_SUBJECT = "detected_subject"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NoteListFilters(AppBaseModel):
    """Filters, sorting and paging for the notes listing."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    search: str | None = Field(default=None, max_length=200)
    input_type: InputType | None = None
    language: str | None = Field(default=None, max_length=100)
    subject: Subject | None = None
    start_date: date | None = None
    end_date: date | None = None
    sort_by: NoteSortField = NoteSortField.CREATED_AT
    sort: SortDirection = SortDirection.DESC

    @field_validator("search", "language")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_date_range(self) -> NoteListFilters:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def applied(self) -> dict[str, str]:
        """Non-default filters as sent back to the client."""
        applied: dict[str, str] = {}
        if self.search:
            applied["search"] = self.search
        if self.input_type:
            applied["inputType"] = self.input_type.value
        if self.language:
            applied["language"] = self.language
        if self.subject:
            applied["subject"] = self.subject.value
        if self.start_date:
            applied["startDate"] = self.start_date.isoformat()
        if self.end_date:
            applied["endDate"] = self.end_date.isoformat()
        applied["sortBy"] = self.sort_by.value
        applied["sort"] = self.sort.value
        return applied


class PaginationInfo(AppBaseModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total_count: int) -> PaginationInfo:
        total_pages = math.ceil(total_count / limit) if total_count else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            limit=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class NotePage(AppBaseModel):
    """One page of notes plus paging metadata."""

    notes: list[Note]
    pagination: PaginationInfo
    applied_filters: dict[str, str] = Field(default_factory=dict)
