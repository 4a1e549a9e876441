"""Prompt templates for detection, note generation and language correction.

All builders are plain string interpolation; the only branching is the choice
between the text, audio file and audio transcript variants.
"""

from __future__ import annotations

from notes_maker.core.models.note import InputType, Subject
from notes_maker.core.taxonomy import SUBJECTS

LANGUAGE_SAMPLE_CHARS = 500
SUBJECT_SAMPLE_CHARS = 2000

NOTE_TAKER_SYSTEM_INSTRUCTION = (
    "You are an expert academic note-taker. You turn lecture material into clear, "
    "well-structured study notes in Markdown: headings for topics, bullet points for key "
    "ideas, definitions and formulas called out explicitly, and a short summary at the end. "
    "You never add content that is unrelated to the lecture, and you always answer in the "
    "language you are asked to use."
)

LANGUAGE_DETECTION_TEMPLATE = (
    'Identify the language of this text. Respond with ONLY the language name in English '
    '(e.g., "English", "Spanish", "French", "Hindi", "Kannada", "Tamil", "Telugu", "Bengali", '
    '"Gujarati", "Marathi", "Punjabi", "Chinese", "Japanese", "Korean", "Arabic", "German", '
    '"Italian", "Portuguese", "Russian", etc.). Do not include any other text or explanation:\n'
    "\n"
    '"{sample}"'
)

SUBJECT_DETECTION_TEMPLATE = (
    "Analyze this text and identify the single most appropriate academic subject it belongs to. "
    "Reply with ONLY one of these exact subjects (case-insensitive match will be accepted): "
    "{subjects}. Do not add any other text or explanation.\n"
    "\n"
    "Text to analyze:\n"
    '"{sample}"'
)

_LANGUAGE_REQUIREMENT = (
    "🚨 CRITICAL LANGUAGE REQUIREMENT 🚨\n"
    "The {source} is written in {language}.\n"
    "You MUST write your ENTIRE response in {language} ONLY.\n"
    "Do NOT use English or any other language.\n"
    "Every single word, sentence, and paragraph must be in {language}.\n"
    "If you write even one word in English, you have FAILED this task."
)

_SUBJECT_FOCUS = (
    "📚 SUBJECT FOCUS: {subject}\n"
    "Focus on creating notes that are relevant to {subject} and use appropriate terminology "
    "and concepts from this field."
)

_CLOSING = (
    "Generate detailed, organized academic notes in {language} language only, focusing on "
    "{subject}. Remember: {language} ONLY!"
)


def _label(subject: Subject | str) -> str:
    return subject.value if isinstance(subject, Subject) else subject


def _quoted_subjects() -> str:
    return ", ".join(f'"{s.value}"' for s in SUBJECTS)


def build_language_detection_prompt(text: str) -> str:
    return LANGUAGE_DETECTION_TEMPLATE.format(sample=text[:LANGUAGE_SAMPLE_CHARS])


def build_subject_detection_prompt(text: str) -> str:
    return SUBJECT_DETECTION_TEMPLATE.format(
        subjects=_quoted_subjects(),
        sample=(text or "")[:SUBJECT_SAMPLE_CHARS],
    )


def build_text_prompt(content: str, language: str, subject: Subject | str) -> str:
    """Prompt for notes written by a professor and submitted as text."""
    subject = _label(subject)
    return "\n\n".join([
        f"You are an expert academic note-taker specializing in {subject}. Please elaborate "
        "and organize the following professor's notes into comprehensive, well-structured "
        "academic notes.",
        _LANGUAGE_REQUIREMENT.format(source="input text", language=language),
        _SUBJECT_FOCUS.format(subject=subject),
        f'Input text in {language}: "{content}"',
        _CLOSING.format(language=language, subject=subject),
    ])


def build_transcript_prompt(transcript: str, language: str, subject: Subject | str) -> str:
    """Prompt for an audio lecture that arrives already transcribed."""
    subject = _label(subject)
    return "\n\n".join([
        f"You are an expert academic note-taker specializing in {subject}. Generate "
        "comprehensive academic notes from the following audio transcript.",
        _LANGUAGE_REQUIREMENT.format(source="transcript", language=language),
        _SUBJECT_FOCUS.format(subject=subject),
        f'Audio transcript in {language}: "{transcript}"',
        _CLOSING.format(language=language, subject=subject),
    ])


def build_audio_file_prompt(filename: str, mime_type: str) -> str:
    """Prompt sent alongside raw audio; the model infers language and subject itself."""
    subjects = ", ".join(s.value for s in SUBJECTS[:-1]) + f", or {SUBJECTS[-1].value}"
    return "\n\n".join([
        "You are an expert academic note-taker. Please transcribe this audio file and then "
        "generate comprehensive academic notes from the transcript.",
        "🚨 CRITICAL LANGUAGE REQUIREMENT 🚨\n"
        "You MUST detect the language of the audio content and generate your response "
        "ENTIRELY in that same language. Do NOT translate anything to English or any other "
        "language. Every single word of your response must be in the original language of "
        "the audio.",
        "📚 SUBJECT DETECTION\n"
        f"Also identify the academic subject ({subjects}) and focus your notes accordingly.",
        f"Audio file: {filename} ({mime_type})",
        "Generate detailed, organized academic notes in the original language of the audio only.",
    ])


def build_generation_prompt(
    input_type: InputType,
    content: str,
    language: str,
    subject: Subject | str,
    *,
    audio_mime_type: str | None = None,
) -> str:
    """Pick the prompt variant for the input.

    For audio with `audio_mime_type` set, `content` is the uploaded filename;
    otherwise it is the text (or transcript) itself.
    """
    if input_type == InputType.TEXT:
        return build_text_prompt(content, language, subject)
    if audio_mime_type is not None:
        return build_audio_file_prompt(content, audio_mime_type)
    return build_transcript_prompt(content, language, subject)


def build_language_correction_prompt(notes: str, target_language: str) -> str:
    """Second pass asking the model to rewrite generated notes fully in one language."""
    return (
        "🚨 URGENT LANGUAGE CORRECTION TASK 🚨\n\n"
        f"The following text should be written in {target_language}.\n\n"
        f"You MUST ensure the ENTIRE text is in {target_language} ONLY. "
        "Do NOT include words from other languages.\n\n"
        "Original text to correct:\n"
        f'"{notes}"\n\n'
        f"Return ONLY the corrected text in {target_language}."
    )
