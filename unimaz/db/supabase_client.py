"""
Supabase client initialization module.

Provides a thread-safe singleton client for the optional remote storage
backend. Only used when UNIMAZ_STORAGE_BACKEND=supabase.
"""

import threading
from supabase import create_client, Client
from unimaz.config import get_settings

_client: Client | None = None
_lock = threading.Lock()


def get_supabase_client() -> Client:
    """
    Return the shared Supabase client (singleton), initializing once in a thread-safe way.

    Returns:
        Client: Shared Supabase client instance

    Raises:
        ValueError: If UNIMAZ_SUPABASE_URL or UNIMAZ_SUPABASE_KEY are missing,
            or the client cannot be created
    """
    global _client
    if _client is not None:
        return _client
    with _lock:
        if _client is not None:
            return _client
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError(
                "UNIMAZ_SUPABASE_URL and UNIMAZ_SUPABASE_KEY must be set "
                "to use the supabase storage backend"
            )
        try:
            _client = create_client(settings.supabase_url, settings.supabase_key)
            return _client
        except Exception as e:
            raise ValueError(f"Failed to create Supabase client: {str(e)}") from e


def reset_supabase_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _client
    with _lock:
        _client = None
