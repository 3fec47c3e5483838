"""Business rules around sessions."""

from __future__ import annotations

import uuid

from filmoteka.entities import Session
from filmoteka.session_repo import SessionRepo


class NoSessionError(LookupError):
    """No session exists for the given id."""

    def __init__(self, message: str = "no session with such ID") -> None:
        super().__init__(message)


class SessionUseCase:
    """Session operations on top of a session repository."""

    def __init__(self, session_repo: SessionRepo) -> None:
        self._session_repo = session_repo

    def create_session(self, user_id: int) -> str:
        """Open a session for ``user_id`` and return its new id."""
        session = Session(id=str(uuid.uuid4()), user_id=user_id)
        self._session_repo.create_session(session)
        return session.id

    def get_session(self, session_id: str) -> Session:
        session = self._session_repo.get_session(session_id)
        if session is None:
            raise NoSessionError()
        return session

    def delete_session(self, session_id: str) -> bool:
        if not self._session_repo.delete_session(session_id):
            raise NoSessionError()
        return True