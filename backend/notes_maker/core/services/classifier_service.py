"""Language and subject detection for lecture input.

Both detectors call the text generator and degrade to a sentinel value when
the call fails: "unknown" for language and General for subject. Subject
detection combines the model's answer with a keyword score over the static
taxonomy; `choose_subject` holds the voting rule and does no I/O.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from notes_maker.core.models.note import DEFAULT_LANGUAGE, Subject
from notes_maker.core.prompts import build_language_detection_prompt, build_subject_detection_prompt
from notes_maker.core.schemas.classification import ClassificationResult
from notes_maker.core.services.generation_service import GenerationOptions, PromptPart
from notes_maker.core.taxonomy import SUBJECT_KEYWORDS, SUBJECT_SYNONYMS, SUBJECTS
from notes_maker.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notes_maker.core.services.generation_service import TextGenerator

logger = get_logger(__name__)

UNKNOWN_LANGUAGE = "unknown"

LANGUAGE_DETECTION_OPTIONS = GenerationOptions(temperature=0.1, max_output_tokens=20)
SUBJECT_DETECTION_OPTIONS = GenerationOptions(temperature=0.0, max_output_tokens=30)

# Minimum keyword hits before the heuristic may overrule the model
HEURISTIC_OVERRIDE_MIN_SCORE = 2

_QUOTES_RE = re.compile(r"[\"“”‘’]")


def _first_sentence(text: str) -> str:
    return text.split("\n", 1)[0].split(".", 1)[0].strip()


def clean_language_answer(raw: str | None) -> str:
    """Reduce a model answer to a bare language name."""
    return _first_sentence((raw or "").strip())


def clean_subject_answer(raw: str | None) -> str | None:
    """Strip quotes and trailing chatter from a subject answer; None when empty."""
    if not raw:
        return None
    cleaned = _first_sentence(_QUOTES_RE.sub("", raw).strip())
    return cleaned or None


def normalize_subject(cleaned: str | None) -> Subject | None:
    """Map a cleaned model answer onto the taxonomy.

    Tries an exact label, then a label contained in the answer, then a
    synonym contained in the answer. Returns None when nothing matches.
    """
    if not cleaned:
        return None
    lowered = cleaned.lower()

    for subject in SUBJECTS:
        if subject.value.lower() == lowered:
            return subject

    for subject in SUBJECTS:
        if subject.value.lower() in lowered:
            return subject

    for alias, subject in SUBJECT_SYNONYMS.items():
        if alias in lowered:
            return subject

    return None


def score_subjects(text: str | None) -> dict[Subject, int]:
    """Count, per subject, how many of its keywords appear in the text."""
    text_lower = (text or "").lower()
    return {
        subject: sum(1 for kw in SUBJECT_KEYWORDS[subject] if kw in text_lower)
        for subject in SUBJECTS
    }


def top_heuristic(scores: Mapping[Subject, int]) -> tuple[Subject, int]:
    """Highest scoring subject; the earliest subject in taxonomy order wins ties."""
    best_subject = SUBJECTS[0]
    best_score = scores.get(best_subject, 0)
    for subject in SUBJECTS[1:]:
        score = scores.get(subject, 0)
        if score > best_score:
            best_subject, best_score = subject, score
    return best_subject, best_score


def choose_subject(model_subject: Subject | None, scores: Mapping[Subject, int]) -> Subject:
    """Decide between the model vote and the keyword heuristic.

    A model answer stands unless the heuristic names a different subject with
    at least HEURISTIC_OVERRIDE_MIN_SCORE hits and strictly more hits than the
    model's subject. Without a model answer, any heuristic hit wins and
    General is the fallback.
    """
    heuristic_subject, heuristic_score = top_heuristic(scores)

    if model_subject is not None:
        model_score = scores.get(model_subject, 0)
        if (
            heuristic_subject != model_subject
            and heuristic_score >= HEURISTIC_OVERRIDE_MIN_SCORE
            and heuristic_score > model_score
        ):
            return heuristic_subject
        return model_subject

    if heuristic_score > 0:
        return heuristic_subject
    return Subject.GENERAL


def needs_language_retry(language: str) -> bool:
    """True when a detected language looks unreliable enough to ask again."""
    return language == UNKNOWN_LANGUAGE or "English" in language or "##" in language


def resolve_target_language(language: str | None) -> str:
    """Language the notes must end up in; English when detection failed."""
    if not language or language == UNKNOWN_LANGUAGE:
        return DEFAULT_LANGUAGE
    return language


async def detect_language(generator: TextGenerator, text: str | None) -> str:
    """Ask the model for the language of the first 500 characters.

    Returns "unknown" for blank input or when the call fails.
    """
    if not text or not text.strip():
        logger.warning("No text available for language detection")
        return UNKNOWN_LANGUAGE

    try:
        raw = await generator.generate(
            [PromptPart.from_text(build_language_detection_prompt(text))],
            LANGUAGE_DETECTION_OPTIONS,
        )
    except Exception as err:
        logger.warning("Language detection failed: %s", err, extra={"error_type": type(err).__name__})
        return UNKNOWN_LANGUAGE

    language = clean_language_answer(raw)
    logger.debug("Raw language detection: %r, cleaned: %r", raw, language)
    return language or UNKNOWN_LANGUAGE


async def detect_subject(generator: TextGenerator, text: str | None) -> Subject:
    """Classify text into the subject taxonomy.

    Returns General for blank input or when the model call fails.
    """
    if not text or not text.strip():
        logger.warning("No text available for subject detection")
        return Subject.GENERAL

    try:
        raw = await generator.generate(
            [PromptPart.from_text(build_subject_detection_prompt(text))],
            SUBJECT_DETECTION_OPTIONS,
        )
    except Exception as err:
        logger.warning("Subject detection failed: %s", err, extra={"error_type": type(err).__name__})
        return Subject.GENERAL

    cleaned = clean_subject_answer(raw)
    model_subject = normalize_subject(cleaned)
    scores = score_subjects(text)
    subject = choose_subject(model_subject, scores)

    heuristic_subject, heuristic_score = top_heuristic(scores)
    logger.debug(
        "Subject detection - raw: %r, model: %s, heuristic: %s (%d), chosen: %s",
        raw,
        model_subject.value if model_subject else None,
        heuristic_subject.value,
        heuristic_score,
        subject.value,
    )
    return subject


async def classify(
    generator: TextGenerator,
    text: str,
    *,
    retry_language: bool = True,
) -> ClassificationResult:
    """Detect language and subject, re-asking once for a doubtful language.

    The retry sends the same input again. Transcripts pass
    `retry_language=False` and keep the first answer.
    """
    language = await detect_language(generator, text)
    subject = await detect_subject(generator, text)
    logger.info("Detected language: %s, subject: %s", language, subject.value)

    if retry_language and needs_language_retry(language):
        logger.info("Retrying language detection (first answer: %r)", language)
        language = await detect_language(generator, text)
        logger.info("Retry detected language: %s", language)

    return ClassificationResult(language=language, subject=subject)
