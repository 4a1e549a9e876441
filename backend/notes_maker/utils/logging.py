from __future__ import annotations

import logging
import sys

from notes_maker.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log each outgoing OpenAI/Supabase request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai", "hpack")


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the API process.

    `level` overrides `APP_LOG_LEVEL`. Uvicorn keeps INFO so access lines are
    still written when the app itself runs at WARNING.
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    for name in ("uvicorn", "uvicorn.access", "fastapi"):
        logging.getLogger(name).setLevel(logging.INFO)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level_name})


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def preview(text: str | None, limit: int = 200) -> str:
    """Shorten long text for log lines."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"
