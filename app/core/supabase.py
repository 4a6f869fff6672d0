from functools import lru_cache
from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions
from app.core.config import settings

@lru_cache
def get_supabase_client() -> Client:
    # Service-role client; bypasses row-level security
    supabase = create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_SERVICE_ROLE_KEY,
        options=ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )
    )
    return supabase

def get_anon_client() -> Client:
    """
    Client acting on behalf of an end user. A fresh one per caller so that
    sessions never leak between requests.
    """
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_KEY,
        options=ClientOptions(
            postgrest_client_timeout=10,
            storage_client_timeout=10,
        )
    )
