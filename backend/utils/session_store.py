"""
Session storage for the cookie-based admin login.

The request layer depends on the ``SessionStore`` interface only; the
in-memory implementation is process-local, so sessions are lost on restart
and the service is limited to a single instance.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional
import logging

import pytz

logger = logging.getLogger(__name__)


@dataclass
class SessionData:
    username: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(pytz.utc)
        return now > self.expires_at


class SessionStore(ABC):
    @abstractmethod
    def get(self, session_id: str) -> Optional[SessionData]:
        """Return the live session for ``session_id`` or None."""

    @abstractmethod
    def set(self, session_id: str, data: SessionData) -> None:
        """Create or replace a session."""

    @abstractmethod
    def expire(self, session_id: str) -> None:
        """Drop a session. Unknown ids are ignored."""


class InMemorySessionStore(SessionStore):
    def __init__(self):
        self._sessions: Dict[str, SessionData] = {}

    def get(self, session_id: str) -> Optional[SessionData]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired():
            logger.info(f"Session for '{session.username}' expired")
            self.expire(session_id)
            return None
        return session

    def set(self, session_id: str, data: SessionData) -> None:
        self.purge_expired()
        self._sessions[session_id] = data

    def purge_expired(self) -> int:
        """Drop every expired session; returns how many were removed."""
        now = datetime.now(pytz.utc)
        expired = [sid for sid, session in self._sessions.items() if session.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def expire(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self):
        return len(self._sessions)


_session_store = InMemorySessionStore()


def get_session_store() -> SessionStore:
    """FastAPI dependency; tests override it with a fresh store."""
    return _session_store
