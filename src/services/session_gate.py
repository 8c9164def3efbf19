from __future__ import annotations

import logging
import secrets
from typing import Optional

from jose import JWTError, jwt

from src.app.infra.sessions.base import SessionRecord
from src.services.errors import UnauthorizedError

logger = logging.getLogger(__name__)

_TOKEN_ALGORITHM = "HS256"


def encode_session_token(session_id: str, secret: str) -> str:
    return jwt.encode({"sid": session_id}, secret, algorithm=_TOKEN_ALGORITHM)


def decode_session_token(token: str, secret: str) -> Optional[str]:
    """Return the session id carried by a cookie token, or None if it was tampered with."""
    if not token or not secret:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[_TOKEN_ALGORITHM])
    except JWTError:
        return None
    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) and session_id else None


def authenticate(session: SessionRecord, password: Optional[str], expected: str) -> bool:
    """Mark the session authenticated when ``password`` matches the app password."""
    if not password or not expected:
        return False
    if not secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
        logger.info("auth.login_failed session=%s", session.session_id[:8])
        return False
    session.authenticated = True
    logger.info("auth.login_ok session=%s", session.session_id[:8])
    return True


def is_authenticated(session: Optional[SessionRecord]) -> bool:
    return bool(session is not None and session.authenticated)


def require_authenticated(session: Optional[SessionRecord]) -> SessionRecord:
    if not is_authenticated(session):
        raise UnauthorizedError("Authentication required")
    return session
