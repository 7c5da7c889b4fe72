from supabase import create_client, Client, ClientOptions
from app.config import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Anon-key data client. Never signed in, so its Authorization header stays the anon key."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS.

        Without a service key this is the anon client, and table reads are subject
        to RLS as an anonymous caller.
        """
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()

    @classmethod
    def new_auth_client(cls) -> Client:
        """Short-lived client for sign-in/token checks; no session is stored or refreshed."""
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False)
        )

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    """Data handle for tables and storage."""
    return SupabaseClient.get_service_client()


def get_auth_supabase() -> Client:
    """Per-request auth handle. Sign-in rebinds a client's headers, so it is never shared."""
    return SupabaseClient.new_auth_client()
