# src/app/infra/sessions/base.py
"""
Abstract session table.
Sessions are keyed by an opaque id and carry the authenticated flag.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionRecord:
    """Server-side state for one client."""
    session_id: str = field(default_factory=lambda: uuid4().hex)
    authenticated: bool = False
    created_at: datetime = field(default_factory=_now_utc)
    expires_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class SessionStore(ABC):
    """
    Abstract interface for session persistence.

    Implementations:
    - InMemorySessionStore: process-local dict, lost on restart
    - Future: a shared store when running more than one process
    """

    def __init__(self, max_age: timedelta) -> None:
        self.max_age = max_age

    def new_session(self, now: Optional[datetime] = None) -> SessionRecord:
        """Build an unsaved record whose lifetime starts now."""
        created = now or _now_utc()
        return SessionRecord(created_at=created, expires_at=created + self.max_age)

    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Look up a live session.

        Returns:
            The record, or None if unknown or expired (expired records are removed)
        """
        pass

    @abstractmethod
    def save(self, record: SessionRecord) -> None:
        pass

    @abstractmethod
    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns True if it existed."""
        pass

    @abstractmethod
    def purge_expired(self) -> int:
        """Drop every expired record and return how many were removed."""
        pass
