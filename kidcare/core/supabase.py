from supabase import AsyncClient, acreate_client

from kidcare.core.config import settings

_client: AsyncClient | None = None


async def get_client() -> AsyncClient:
    """Return the shared Supabase client, creating it on first use."""
    global _client
    if _client is None:
        # Service role key bypasses RLS; profile-scoped endpoints resolve the
        # profile through its owning user_id before touching daily_logs.
        _client = await acreate_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY,
        )
    return _client
