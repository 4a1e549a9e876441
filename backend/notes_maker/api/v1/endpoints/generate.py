from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from notes_maker.api.v1.schemas.generation import GenerateNotesResponse
from notes_maker.config import settings
from notes_maker.core.models.note import InputType
from notes_maker.core.schemas.generation import AudioUpload, NoteGenerationRequest
from notes_maker.core.services.generation_service import GenerationError, audio_format_for
from notes_maker.core.services.note_generation_service import NoteGenerationService  # noqa: TCH001
from notes_maker.dependencies import get_note_generation_service
from notes_maker.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

MISSING_INPUT_DETAIL = 'Missing "type" or "content" in the form data.'
INVALID_TYPE_DETAIL = 'Invalid input type. Must be "text" or "audio".'


async def _read_payload(request: Request) -> tuple[Any, Any]:
    """Pull `type` and `content` from a multipart/urlencoded form or a JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as err:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body") from err
        if not isinstance(body, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_INPUT_DETAIL)
        return body.get("type"), body.get("content")

    form = await request.form()
    return form.get("type"), form.get("content")


async def _content_from_upload(upload: UploadFile) -> str | AudioUpload:
    mime_type = (upload.content_type or "").lower()
    # Read at most one byte past the limit
    data = await upload.read(settings.max_upload_bytes + 1)
    logger.info("File uploaded", extra={"upload_name": upload.filename, "mime_type": mime_type, "size": len(data)})

    if len(data) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {settings.max_upload_bytes} byte limit",
        )

    if mime_type.startswith("audio/"):
        if audio_format_for(mime_type) is None:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=f"Unsupported audio format: {mime_type}. Use WAV or MP3.",
            )
        return AudioUpload(filename=upload.filename, mime_type=mime_type, data=data)

    if mime_type.startswith("text/"):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Text files must be UTF-8 encoded",
            ) from err

    raise HTTPException(
        status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        detail="Only audio and text files are allowed!",
    )


@router.post("/generate-notes", response_model=GenerateNotesResponse)
async def generate_notes(
    request: Request,
    service: NoteGenerationService = Depends(get_note_generation_service),
):
    """Generate academic notes from lecture text, a transcript, or an audio file.

    Accepts `type` (text|audio) and `content`, either as a form field, an
    uploaded file, or a JSON body.
    """
    raw_type, raw_content = await _read_payload(request)

    content: str | AudioUpload | None
    if isinstance(raw_content, UploadFile):
        content = await _content_from_upload(raw_content)
    elif isinstance(raw_content, str) and raw_content.strip():
        content = raw_content
    else:
        content = None

    if not raw_type or content is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_INPUT_DETAIL)

    try:
        input_type = InputType(str(raw_type).strip().lower())
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TYPE_DETAIL) from err

    try:
        generation_request = NoteGenerationRequest(
            input_type=input_type,
            text=content if isinstance(content, str) else None,
            audio=content if isinstance(content, AudioUpload) else None,
        )
    except ValidationError as err:
        message = err.errors()[0].get("msg", str(err)) if err.errors() else str(err)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message) from err

    try:
        outcome = await service.generate_notes(generation_request)
    except GenerationError as err:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to generate notes from AI.", "details": str(err)},
        ) from err

    return GenerateNotesResponse(status="success", **outcome.model_dump())
