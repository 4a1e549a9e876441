from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Supabase (persistence is disabled when either value is missing)
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    notes_table: str = "notes"

    # OpenAI
    openai_api_key: str | None = None
    generation_model: str = "gpt-4o-mini"
    audio_model: str = "gpt-4o-audio-preview"
    openai_max_retries: int = 0

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB

    @property
    def database_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


settings = Settings()
