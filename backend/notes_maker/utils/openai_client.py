from __future__ import annotations

from functools import lru_cache
from typing import Any

from openai import AsyncOpenAI

from notes_maker.config import settings
from notes_maker.utils.logging import get_logger


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Return the shared OpenAI client used for generation and detection.

    SDK retries follow `APP_OPENAI_MAX_RETRIES` (0 by default). The key comes
    from `APP_OPENAI_API_KEY` when set, otherwise the SDK reads OPENAI_API_KEY
    from the environment.
    """
    logger = get_logger(__name__)
    kwargs: dict[str, Any] = {"max_retries": settings.openai_max_retries}
    if settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key
    logger.debug(
        "Initializing OpenAI client",
        extra={"explicit_key": bool(settings.openai_api_key), "max_retries": settings.openai_max_retries},
    )
    return AsyncOpenAI(**kwargs)
