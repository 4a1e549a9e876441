from __future__ import annotations

from pydantic import Field

from notes_maker.core.models.base import AppBaseModel
from notes_maker.core.models.note import Subject


class ClassificationResult(AppBaseModel):
    """Language and subject detected for one piece of input text."""

    language: str = Field(description="Display name of the detected language, or 'unknown'")
    subject: Subject = Field(default=Subject.GENERAL, description="Academic subject label")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "language": "Kannada",
                    "subject": "Physics",
                }
            ]
        }
    }
