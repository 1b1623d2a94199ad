"""
Supabase client factory.

The client only talks to Supabase Storage with the public anon key,
so no auth session is ever persisted by the SDK.
"""

from typing import Optional
from supabase import create_client, Client, ClientOptions

from .config import get_settings

# Module-level client cache
_storage_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the Supabase client used for object storage.

    Returns:
        Supabase client configured with the anon key

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is not set
    """
    global _storage_client

    if _storage_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _storage_client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=ClientOptions(persist_session=False),
        )

    return _storage_client


def reset_client_cache() -> None:
    """
    Reset the cached storage client.

    Useful for testing or when configuration changes.
    """
    global _storage_client
    _storage_client = None
