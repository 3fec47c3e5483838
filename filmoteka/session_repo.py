"""Session storage in Redis."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from filmoteka.entities import Session

SESSION_TTL_SECONDS = 24 * 60 * 60


class SessionRepo(ABC):
    """Persistent storage of sessions."""

    @abstractmethod
    def create_session(self, session: Session) -> None:
        """Store ``session``."""

    @abstractmethod
    def get_session(self, session_id: str) -> Session | None:
        """Return the session stored under ``session_id``."""

    @abstractmethod
    def delete_session(self, session_id: str) -> bool:
        """Delete a session; return whether it existed."""


class SessionRepoRedis(SessionRepo):
    """Sessions kept as Redis keys mapping the session id to the user id."""

    def __init__(self, redis_conn: Any) -> None:
        self._redis = redis_conn
        self.expire_time = SESSION_TTL_SECONDS

    def create_session(self, session: Session) -> None:
        self._redis.set(session.id, session.user_id, ex=self.expire_time)

    def get_session(self, session_id: str) -> Session:
        reply = self._redis.get(session_id)
        if reply is None:
            raise LookupError(f"no value stored for session {session_id}")
        return Session(id=session_id, user_id=int(reply))

    def delete_session(self, session_id: str) -> bool:
        if not self._redis.exists(session_id):
            return False
        self._redis.delete(session_id)
        return True