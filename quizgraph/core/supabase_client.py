from typing import Optional

from supabase import AsyncClient, AsyncClientOptions, acreate_client

from .config import settings

# ---------------------------
# Singleton client
# ---------------------------

_client: Optional[AsyncClient] = None


async def get_supabase() -> AsyncClient:
    """
    Return singleton async Supabase client using settings.SUPABASE_URL / service role key.
    """
    global _client
    if _client is None:
        _client = await acreate_client(
            str(settings.SUPABASE_URL),
            settings.SUPABASE_SERVICE_ROLE_KEY,
            options=AsyncClientOptions(schema=settings.SUPABASE_SCHEMA),
        )
    return _client
