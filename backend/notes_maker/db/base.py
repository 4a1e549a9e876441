from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from notes_maker.config import settings
from notes_maker.utils.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Return a cached Supabase client using the service role key.

    Notes are not owned by individual users, so a single privileged client
    serves every request.
    """
    logger.debug("Initializing Supabase client")
    if not settings.database_configured:
        raise RuntimeError("supabase_url and supabase_service_role_key are required")
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
