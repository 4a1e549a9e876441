from __future__ import annotations

from notes_maker.core.models.note import InputType, Subject
from notes_maker.core.prompts import (
    build_audio_file_prompt,
    build_generation_prompt,
    build_language_correction_prompt,
    build_subject_detection_prompt,
    build_text_prompt,
    build_transcript_prompt,
)


def test_text_prompt_names_language_and_subject():
    prompt = build_text_prompt("ನ್ಯೂಟನ್ ನಿಯಮಗಳು", "Kannada", Subject.PHYSICS)

    assert prompt.startswith("You are an expert academic note-taker specializing in Physics.")
    assert "The input text is written in Kannada." in prompt
    assert "📚 SUBJECT FOCUS: Physics" in prompt
    assert 'Input text in Kannada: "ನ್ಯೂಟನ್ ನಿಯಮಗಳು"' in prompt
    assert prompt.endswith("Remember: Kannada ONLY!")
    assert "Subject." not in prompt


def test_transcript_prompt_mentions_transcript():
    prompt = build_transcript_prompt("so today, photosynthesis", "English", "Biology")

    assert "from the following audio transcript" in prompt
    assert "The transcript is written in English." in prompt
    assert 'Audio transcript in English: "so today, photosynthesis"' in prompt


def test_audio_file_prompt_leaves_detection_to_the_model():
    prompt = build_audio_file_prompt("lecture-3.mp3", "audio/mpeg")

    assert "transcribe this audio file" in prompt
    assert "detect the language of the audio content" in prompt
    assert "Audio file: lecture-3.mp3 (audio/mpeg)" in prompt
    assert "Entertainment, or General" in prompt


def test_generation_prompt_picks_variant():
    text = build_generation_prompt(InputType.TEXT, "notes", "Hindi", Subject.HISTORY)
    transcript = build_generation_prompt(InputType.AUDIO, "notes", "Hindi", Subject.HISTORY)
    audio = build_generation_prompt(
        InputType.AUDIO, "talk.wav", "unknown", Subject.GENERAL, audio_mime_type="audio/wav"
    )

    assert text == build_text_prompt("notes", "Hindi", Subject.HISTORY)
    assert transcript == build_transcript_prompt("notes", "Hindi", Subject.HISTORY)
    assert audio == build_audio_file_prompt("talk.wav", "audio/wav")


def test_prompts_keep_braces_in_user_content():
    prompt = build_text_prompt("f(x) = {x^2}", "English", Subject.MATHEMATICS)
    assert "{x^2}" in prompt


def test_subject_detection_prompt_truncates_to_2000_characters():
    prompt = build_subject_detection_prompt("b" * 2500)
    assert "b" * 2000 in prompt
    assert "b" * 2001 not in prompt


def test_language_correction_prompt_wraps_notes():
    prompt = build_language_correction_prompt("# Notas\n- uno", "Spanish")

    assert "The following text should be written in Spanish." in prompt
    assert 'Original text to correct:\n"# Notas\n- uno"' in prompt
    assert prompt.endswith("Return ONLY the corrected text in Spanish.")
