# src/app/deps.py (singletons exposed as dependencies)

from __future__ import annotations

from datetime import timedelta

from fastapi import Depends, Request
from supabase import Client, create_client

from src.app.config import settings
from src.app.infra.db.base import RecipeRepository
from src.app.infra.db.supabase_recipes_repo import SupabaseRecipeRepository
from src.app.infra.sessions.base import SessionRecord, SessionStore
from src.app.infra.sessions.memory_store import InMemorySessionStore
from src.services.gemini_client import GeminiExtractionClient
from src.services.ingest import Extractor
from src.services.prompt import get_instructions
from src.services.session_gate import decode_session_token, require_authenticated

SESSION_COOKIE = "recipe_session"

_client: Client | None = None
_session_store: SessionStore | None = None
_extractor: GeminiExtractionClient | None = None


def get_supabase() -> Client | None:
    """Shared Supabase client, or None when the store is not configured."""
    global _client
    if _client is None and settings.store_configured:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value())
    return _client


def get_recipe_repository(supa: Client | None = Depends(get_supabase)) -> RecipeRepository:
    return SupabaseRecipeRepository(supa)


async def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore(
            max_age=timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS),
        )
    return _session_store


def get_extractor() -> Extractor:
    global _extractor
    if _extractor is None:
        _extractor = GeminiExtractionClient(
            api_key=settings.GEMINI_API_KEY.get_secret_value(),
            instructions=get_instructions(),
            model_name=settings.GEMINI_MODEL,
        )
    return _extractor


async def get_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
) -> SessionRecord:
    """
    Session for the calling client.
    Unknown, tampered or expired cookies yield a fresh unsaved record.
    """
    token = request.cookies.get(SESSION_COOKIE)
    session_id = decode_session_token(token, settings.session_secret) if token else None
    if session_id:
        record = store.get(session_id)
        if record is not None:
            return record
    return store.new_session()


async def require_auth(session: SessionRecord = Depends(get_session)) -> SessionRecord:
    return require_authenticated(session)
