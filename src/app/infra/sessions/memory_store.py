from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from src.app.infra.sessions.base import SessionRecord, SessionStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = timedelta(hours=24)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySessionStore(SessionStore):
    """Session table held in a dict.

    Expiry is absolute: a session lives ``max_age`` from creation no matter
    how often it is used.
    """

    def __init__(
        self,
        max_age: timedelta = DEFAULT_MAX_AGE,
        clock: Callable[[], datetime] = _now_utc,
    ) -> None:
        super().__init__(max_age)
        self._clock = clock
        self._sessions: dict[str, SessionRecord] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def new_session(self, now: Optional[datetime] = None) -> SessionRecord:
        return super().new_session(now or self._clock())

    def get(self, session_id: str) -> Optional[SessionRecord]:
        record = self._sessions.get(session_id)
        if record is None:
            return None
        if record.is_expired(self._clock()):
            self._sessions.pop(session_id, None)
            logger.info("session.expired id=%s", session_id[:8])
            return None
        return record

    def save(self, record: SessionRecord) -> None:
        if record.expires_at is None:
            record.expires_at = record.created_at + self.max_age
        self._sessions[record.session_id] = record

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [sid for sid, record in self._sessions.items() if record.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("session.purged count=%d", len(expired))
        return len(expired)
