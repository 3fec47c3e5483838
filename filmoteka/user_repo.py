"""Storage of users in a relational database."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from filmoteka.entities import User

DEFAULT_ROLE = "default"


class UserRepo(ABC):
    """Persistent storage of users."""

    @abstractmethod
    def login(self, username: str, password: str) -> User | None:
        """Return the user with these credentials or None."""

    @abstractmethod
    def register(self, username: str, password: str) -> User:
        """Store a new user and return it."""

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None:
        """Return the user named ``username`` or None."""

    @abstractmethod
    def get_user_role(self, user_id: int) -> str | None:
        """Return the role of the user or None if there is no such user."""


class UserRepoDB(UserRepo):
    """User storage over a DB-API 2.0 connection using the qmark parameter style."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def _fetch_one(self, query: str, params: Sequence[Any]) -> Any:
        cursor = self._db.cursor()
        try:
            cursor.execute(query, tuple(params))
            return cursor.fetchone()
        finally:
            cursor.close()

    def login(self, username: str, password: str) -> User | None:
        row = self._fetch_one(
            "SELECT id, username FROM users WHERE username = ? AND password = ?",
            (username, password),
        )
        return User(id=int(row[0]), username=row[1]) if row else None

    def register(self, username: str, password: str) -> User:
        cursor = self._db.cursor()
        try:
            cursor.execute(
                "INSERT INTO users (username, password, role) VALUES (?, ?, ?) RETURNING id",
                (username, password, DEFAULT_ROLE),
            )
            user_id = int(cursor.fetchone()[0])
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        finally:
            cursor.close()
        return User(id=user_id, username=username)

    def get_user_by_username(self, username: str) -> User | None:
        row = self._fetch_one("SELECT id, username FROM users WHERE username = ?", (username,))
        return User(id=int(row[0]), username=row[1]) if row else None

    def get_user_role(self, user_id: int) -> str | None:
        row = self._fetch_one("SELECT role FROM users WHERE id = ?", (user_id,))
        return row[0] if row else None