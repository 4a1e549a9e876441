from __future__ import annotations

from fastapi import APIRouter

from notes_maker.api.v1.schemas.generation import SubjectRead
from notes_maker.core.models.note import InputType
from notes_maker.core.taxonomy import subject_catalog

router = APIRouter()


@router.get("/subjects", response_model=list[SubjectRead])
async def list_subjects() -> list[SubjectRead]:
    """Return the fixed subject taxonomy in display order.

    Every stored note carries exactly one of these labels.
    """
    return [SubjectRead.model_validate(entry) for entry in subject_catalog()]


@router.get("/input-types", response_model=list[str])
async def list_input_types() -> list[str]:
    """Return all supported input types for client-side filtering."""
    return [t.value for t in InputType]
