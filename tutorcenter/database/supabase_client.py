from typing import Optional

from fastapi import HTTPException, Request, status
from supabase import AsyncClient, Client, acreate_client, create_client
from tutorcenter.config.settings import settings


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None
    _async_client: AsyncClient = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Optional[Client]:
        """Client with service_role key; bypasses RLS. None when the key is not configured."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client

    @classmethod
    def get_user_client(cls, token: str) -> Client:
        """Anon-key client acting as the caller, so row-level security applies to every query."""
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.postgrest.auth(token)
        return client

    @classmethod
    async def get_async_client(cls) -> AsyncClient:
        """Async client used only for realtime change channels."""
        if cls._async_client is None:
            cls._async_client = await acreate_client(settings.supabase_url, settings.supabase_key)
        return cls._async_client

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None
        cls._async_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_optional_service_supabase() -> Optional[Client]:
    return SupabaseClient.get_service_client()


def get_service_supabase() -> Client:
    client = SupabaseClient.get_service_client()
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error: Missing required environment variables"
        )
    return client


def get_user_supabase(request: Request) -> Client:
    """Per-request client bound to the caller's bearer token (falls back to the anon client)."""
    auth_header = request.headers.get("authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return get_supabase()
    return SupabaseClient.get_user_client(token)
