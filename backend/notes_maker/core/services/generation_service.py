from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any, Protocol

from pydantic import Field, model_validator

from notes_maker.core.models.base import AppBaseModel
from notes_maker.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from openai import AsyncOpenAI

logger = get_logger(__name__)

# Audio containers accepted by the OpenAI `input_audio` content part
AUDIO_FORMATS: dict[str, str] = {
    "audio/wav": "wav",
    "audio/wave": "wav",
    "audio/x-wav": "wav",
    "audio/vnd.wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/mpeg3": "mp3",
    "audio/x-mpeg-3": "mp3",
}


class GenerationError(RuntimeError):
    """Raised when the text generation provider fails or returns nothing usable."""


def audio_format_for(mime_type: str | None) -> str | None:
    """Map an upload MIME type to an OpenAI audio format, or None if unsupported."""
    if not mime_type:
        return None
    return AUDIO_FORMATS.get(mime_type.split(";", 1)[0].strip().lower())


class GenerationOptions(AppBaseModel):
    """Sampling controls for a single generation call."""

    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=2048, gt=0)
    top_k: int | None = Field(default=None, gt=0)
    top_p: float | None = Field(default=None, gt=0.0, le=1.0)


class PromptPart(AppBaseModel):
    """One piece of a prompt: plain text or inline binary audio."""

    text: str | None = None
    mime_type: str | None = None
    data: bytes | None = None

    @model_validator(mode="after")
    def validate_kind(self) -> PromptPart:
        has_text = self.text is not None
        has_audio = self.data is not None
        if has_text == has_audio:
            raise ValueError("A prompt part carries either text or inline data")
        if has_audio and not self.mime_type:
            raise ValueError("Inline data requires a mime_type")
        return self

    @property
    def is_audio(self) -> bool:
        return self.data is not None

    @classmethod
    def from_text(cls, text: str) -> PromptPart:
        return cls(text=text)

    @classmethod
    def from_audio(cls, data: bytes, mime_type: str) -> PromptPart:
        return cls(data=data, mime_type=mime_type)


class TextGenerator(Protocol):
    """Narrow capability used by the classifier and note generation.

    Implementations return plain text and raise on failure.
    """

    async def generate(self, parts: Sequence[PromptPart], options: GenerationOptions) -> str: ...


class OpenAITextGenerator:
    """TextGenerator backed by OpenAI Chat Completions."""

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        model: str,
        audio_model: str,
        system_instruction: str | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._audio_model = audio_model
        self._system_instruction = system_instruction

    @property
    def model_name(self) -> str:
        return self._model

    async def generate(self, parts: Sequence[PromptPart], options: GenerationOptions) -> str:
        if not parts:
            raise GenerationError("Cannot generate from an empty prompt")

        has_audio = any(p.is_audio for p in parts)
        model = self._audio_model if has_audio else self._model

        messages: list[dict[str, Any]] = []
        if self._system_instruction:
            messages.append({"role": "system", "content": self._system_instruction})
        messages.append({"role": "user", "content": [self._to_content(p) for p in parts]})

        request: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": options.temperature,
            "max_completion_tokens": options.max_output_tokens,
        }
        if options.top_p is not None:
            request["top_p"] = options.top_p
        if options.top_k is not None:
            # Chat Completions exposes no top-k control
            logger.debug("Ignoring top_k=%s for OpenAI request", options.top_k)

        logger.debug(
            "Calling OpenAI",
            extra={"model": model, "parts": len(parts), "audio": has_audio, "temperature": options.temperature},
        )
        try:
            response = await self._client.chat.completions.create(**request)
        except Exception as err:
            raise GenerationError(f"OpenAI request failed: {err}") from err

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise GenerationError("OpenAI returned no choices")
        message = choices[0].message
        if getattr(message, "refusal", None):
            logger.warning("OpenAI refused the request: %s", message.refusal)
        return message.content or ""

    @staticmethod
    def _to_content(part: PromptPart) -> dict[str, Any]:
        if not part.is_audio:
            return {"type": "text", "text": part.text}
        audio_format = audio_format_for(part.mime_type)
        if audio_format is None:
            raise GenerationError(f"Unsupported audio type: {part.mime_type}")
        return {
            "type": "input_audio",
            "input_audio": {
                "data": base64.b64encode(part.data or b"").decode("ascii"),
                "format": audio_format,
            },
        }
