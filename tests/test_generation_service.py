from __future__ import annotations

import base64
from types import SimpleNamespace

import pytest

from notes_maker.core.services.generation_service import (
    GenerationError,
    GenerationOptions,
    OpenAITextGenerator,
    PromptPart,
    audio_format_for,
)


class FakeCompletions:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.requests: list[dict] = []
        self._response = response
        self._error = error

    async def create(self, **request):
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._response


def _client(completions: FakeCompletions) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _response(content: str | None) -> SimpleNamespace:
    message = SimpleNamespace(content=content, refusal=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _generator(completions: FakeCompletions) -> OpenAITextGenerator:
    return OpenAITextGenerator(
        _client(completions),
        model="text-model",
        audio_model="audio-model",
        system_instruction="Be concise.",
    )


async def test_text_request_maps_options():
    completions = FakeCompletions(_response("Kannada"))

    answer = await _generator(completions).generate(
        [PromptPart.from_text("Identify the language")],
        GenerationOptions(temperature=0.1, max_output_tokens=20, top_k=40, top_p=0.8),
    )

    assert answer == "Kannada"
    (request,) = completions.requests
    assert request["model"] == "text-model"
    assert request["temperature"] == 0.1
    assert request["max_completion_tokens"] == 20
    assert request["top_p"] == 0.8
    assert "top_k" not in request
    assert request["messages"][0] == {"role": "system", "content": "Be concise."}
    assert request["messages"][1]["content"] == [{"type": "text", "text": "Identify the language"}]


async def test_audio_parts_use_audio_model_and_base64():
    completions = FakeCompletions(_response("# Notes"))

    await _generator(completions).generate(
        [PromptPart.from_text("transcribe"), PromptPart.from_audio(b"ID3", "audio/mpeg")],
        GenerationOptions(),
    )

    request = completions.requests[0]
    assert request["model"] == "audio-model"
    audio = request["messages"][1]["content"][1]
    assert audio["type"] == "input_audio"
    assert audio["input_audio"] == {"data": base64.b64encode(b"ID3").decode(), "format": "mp3"}


async def test_provider_errors_become_generation_errors():
    completions = FakeCompletions(error=TimeoutError("deadline exceeded"))

    with pytest.raises(GenerationError, match="deadline exceeded"):
        await _generator(completions).generate([PromptPart.from_text("hi")], GenerationOptions())


async def test_missing_choices_is_an_error():
    completions = FakeCompletions(SimpleNamespace(choices=[]))

    with pytest.raises(GenerationError):
        await _generator(completions).generate([PromptPart.from_text("hi")], GenerationOptions())


async def test_null_content_is_empty_text():
    completions = FakeCompletions(_response(None))
    assert await _generator(completions).generate([PromptPart.from_text("hi")], GenerationOptions()) == ""


def test_prompt_part_needs_exactly_one_payload():
    with pytest.raises(ValueError):
        PromptPart()
    with pytest.raises(ValueError):
        PromptPart(text="hi", data=b"x", mime_type="audio/wav")
    with pytest.raises(ValueError):
        PromptPart(data=b"x")


@pytest.mark.parametrize(
    ("mime", "expected"),
    [("audio/wav", "wav"), ("audio/mpeg", "mp3"), ("AUDIO/MPEG; charset=x", "mp3"), ("audio/ogg", None), (None, None)],
)
def test_audio_format_for(mime, expected):
    assert audio_format_for(mime) == expected
