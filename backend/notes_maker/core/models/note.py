from __future__ import annotations

from enum import Enum
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from .base import TimestampedModel

DEFAULT_LANGUAGE = "English"
AUDIO_CONTENT_PLACEHOLDER = "audio_file"


class InputType(str, Enum):
    """How the lecture material reached the generator."""

    TEXT = "text"
    AUDIO = "audio"


class Subject(str, Enum):
    """Fixed academic subject taxonomy, in declaration (tie-break) order."""

    MATHEMATICS = "Mathematics"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    PROGRAMMING = "Programming"
    COMPUTER_SCIENCE = "Computer Science"
    HISTORY = "History"
    GEOGRAPHY = "Geography"
    LITERATURE = "Literature"
    LANGUAGE = "Language"
    ART = "Art"
    MUSIC = "Music"
    SPORTS = "Sports"
    ENTERTAINMENT = "Entertainment"
    GENERAL = "General"


class Note(TimestampedModel):
    """Generated lecture note domain model."""

    id: UUID = Field(default_factory=uuid4, description="Unique note identifier")

    input_type: InputType = Field(description="Whether notes came from text or audio input")
    generated_notes: str = Field(min_length=1, description="Markdown notes produced by the model")

    detected_language: str = Field(default=DEFAULT_LANGUAGE, max_length=100, description="Display name of the notes language")
    detected_subject: Subject = Field(default=Subject.GENERAL, description="Academic subject label")

    original_content: str = Field(
        default=AUDIO_CONTENT_PLACEHOLDER,
        description="Raw input text, or the uploaded filename for audio input",
    )

    @field_validator("detected_language", mode="before")
    @classmethod
    def default_blank_language(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_LANGUAGE
        return str(v).strip()

    @field_validator("generated_notes")
    @classmethod
    def validate_generated_notes(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("generated_notes must be non-empty")
        return stripped

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "input_type": "text",
                    "generated_notes": "# Derivatives\n\n- The derivative measures the rate of change...",
                    "detected_language": "English",
                    "detected_subject": "Mathematics",
                    "original_content": "derivative of x squared is 2x, chain rule...",
                }
            ]
        }
    }
