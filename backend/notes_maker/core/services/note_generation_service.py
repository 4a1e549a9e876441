from __future__ import annotations

from typing import TYPE_CHECKING

from notes_maker.core.models.note import AUDIO_CONTENT_PLACEHOLDER, InputType, Note, Subject
from notes_maker.core.prompts import build_generation_prompt, build_language_correction_prompt
from notes_maker.core.schemas.generation import GenerationOutcome
from notes_maker.core.services.classifier_service import UNKNOWN_LANGUAGE, classify, resolve_target_language
from notes_maker.core.services.generation_service import GenerationError, GenerationOptions, PromptPart
from notes_maker.utils.logging import get_logger, preview

if TYPE_CHECKING:
    from notes_maker.core.repositories.note_repository import NoteRepository
    from notes_maker.core.schemas.generation import NoteGenerationRequest
    from notes_maker.core.services.generation_service import TextGenerator

logger = get_logger(__name__)

NOTES_OPTIONS = GenerationOptions(temperature=0.2, top_k=40, top_p=0.8, max_output_tokens=2048)
CORRECTION_OPTIONS = GenerationOptions(temperature=0.1, max_output_tokens=2048)

SAVE_ERROR_MESSAGE = "Notes generated but failed to save to database"
DATABASE_UNAVAILABLE_MESSAGE = "Database not connected - notes not saved"


class NoteGenerationService:
    """Turn lecture text or audio into stored academic notes.

    Calls run one after another: detection, the main generation, then a
    language correction pass. Only a failure of the main generation reaches
    the caller; detection, correction and saving degrade quietly.
    """

    def __init__(
        self,
        generator: TextGenerator,
        repo: NoteRepository | None,
        *,
        model_name: str,
    ) -> None:
        self._generator = generator
        self._repo = repo
        self._model_name = model_name

    async def generate_notes(self, request: NoteGenerationRequest) -> GenerationOutcome:
        language = UNKNOWN_LANGUAGE
        subject = Subject.GENERAL
        parts: list[PromptPart]

        if request.audio is not None:
            audio = request.audio
            filename = audio.filename or AUDIO_CONTENT_PLACEHOLDER
            logger.info(
                "Processing audio file",
                extra={"audio_filename": filename, "mime_type": audio.mime_type, "size": len(audio.data)},
            )
            prompt = build_generation_prompt(
                InputType.AUDIO, filename, language, subject, audio_mime_type=audio.mime_type
            )
            parts = [PromptPart.from_text(prompt), PromptPart.from_audio(audio.data, audio.mime_type)]
            original_content = filename
        else:
            text = request.text or ""
            logger.info("Processing %s input (%d chars)", request.input_type.value, len(text))
            classification = await classify(
                self._generator, text, retry_language=request.input_type == InputType.TEXT
            )
            language, subject = classification.language, classification.subject
            prompt = build_generation_prompt(request.input_type, text, language, subject)
            parts = [PromptPart.from_text(prompt)]
            original_content = text

        notes = await self._generate_primary(parts)

        target_language = resolve_target_language(language)
        notes = await self._correct_language(notes, target_language)

        outcome = GenerationOutcome(
            input_type=request.input_type,
            model_used=self._model_name,
            detected_language=target_language,
            detected_subject=subject,
            generated_notes=notes,
        )
        return await self._save(outcome, original_content)

    async def _generate_primary(self, parts: list[PromptPart]) -> str:
        try:
            notes = await self._generator.generate(parts, NOTES_OPTIONS)
        except GenerationError:
            logger.error("Note generation failed", exc_info=True)
            raise
        except Exception as err:
            logger.error("Note generation failed: %s", err, exc_info=True)
            raise GenerationError(str(err)) from err

        if not notes or not notes.strip():
            raise GenerationError("Model returned empty notes")
        logger.debug("Generated notes: %s", preview(notes))
        return notes

    async def _correct_language(self, notes: str, target_language: str) -> str:
        """Ask the model to rewrite the notes fully in the target language.

        Keeps the original notes when the call fails or returns nothing.
        """
        try:
            corrected = await self._generator.generate(
                [PromptPart.from_text(build_language_correction_prompt(notes, target_language))],
                CORRECTION_OPTIONS,
            )
        except Exception as err:
            logger.warning("Language validation failed, using original notes: %s", err)
            return notes

        if corrected and corrected.strip():
            logger.info("Language validation and correction completed for %s", target_language)
            return corrected.strip()
        logger.warning("Language correction returned nothing, keeping original notes")
        return notes

    async def _save(self, outcome: GenerationOutcome, original_content: str) -> GenerationOutcome:
        if self._repo is None:
            logger.warning("No database configured; returning notes without saving")
            return outcome.model_copy(update={"database_status": DATABASE_UNAVAILABLE_MESSAGE})

        try:
            note = Note(
                input_type=outcome.input_type,
                generated_notes=outcome.generated_notes,
                detected_language=outcome.detected_language,
                detected_subject=outcome.detected_subject,
                original_content=original_content,
            )
            saved = await self._repo.create(note)
        except Exception as err:
            logger.error("Database save error: %s", err, extra={"error_type": type(err).__name__})
            return outcome.model_copy(update={"save_error": SAVE_ERROR_MESSAGE})

        logger.info("Saved note %s", saved.id, extra={"subject": saved.detected_subject.value})
        return outcome.model_copy(update={"note_id": saved.id, "saved_at": saved.created_at})
