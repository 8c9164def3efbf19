from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from src.app.config import settings
from src.app.deps import SESSION_COOKIE, get_session, get_session_store
from src.app.infra.sessions.base import SessionRecord, SessionStore
from src.app.schemas.auth import AuthResponse, AuthStatusResponse, LoginRequest
from src.services.session_gate import authenticate, encode_session_token, is_authenticated

log = logging.getLogger("auth")
router = APIRouter(tags=["auth"])


def _set_session_cookie(response: Response, session: SessionRecord) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=encode_session_token(session.session_id, settings.session_secret),
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    session: SessionRecord = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    expected = settings.APP_PASSWORD.get_secret_value()
    if not authenticate(session, body.password, expected):
        return JSONResponse(status_code=401, content={"success": False, "error": "Invalid password"})

    store.purge_expired()
    store.save(session)
    _set_session_cookie(response, session)
    return AuthResponse(success=True, message="Authentication successful")


@router.post("/logout", response_model=AuthResponse)
async def logout(
    response: Response,
    session: SessionRecord = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    if store.delete(session.session_id):
        log.info("auth.logout session=%s", session.session_id[:8])
    session.authenticated = False
    response.delete_cookie(SESSION_COOKIE)
    return AuthResponse(success=True, message="Logged out successfully")


@router.get("/auth-status", response_model=AuthStatusResponse)
async def auth_status(session: SessionRecord = Depends(get_session)) -> AuthStatusResponse:
    return AuthStatusResponse(authenticated=is_authenticated(session))
