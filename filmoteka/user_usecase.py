"""Business rules around users: login, registration and roles."""

from __future__ import annotations

from filmoteka.entities import User
from filmoteka.password_hash import Hasher
from filmoteka.user_repo import UserRepo


class BadCredentialsError(PermissionError):
    """The username or password is wrong."""

    def __init__(self, message: str = "bad auth data for user") -> None:
        super().__init__(message)


class UserAlreadyExistsError(ValueError):
    """A user with this username is already registered."""

    def __init__(self, message: str = "user with such username already exists") -> None:
        super().__init__(message)


class NoUserError(LookupError):
    """The user does not exist."""

    def __init__(self, message: str = "user not exists") -> None:
        super().__init__(message)


class UserUseCase:
    """User operations on top of a user repository and a password hasher."""

    def __init__(self, user_repo: UserRepo, hasher: Hasher) -> None:
        self._user_repo = user_repo
        self._hasher = hasher

    def login(self, username: str, password: str) -> User:
        hashed = self._hasher.get_hash_password(password)
        user = self._user_repo.login(username, hashed)
        if user is None:
            raise BadCredentialsError()
        return user

    def register(self, username: str, password: str) -> User | None:
        if self._user_repo.get_user_by_username(username) is not None:
            raise UserAlreadyExistsError()
        hashed = self._hasher.get_hash_password(password)
        return self._user_repo.register(username, hashed)

    def get_user_role(self, user_id: int) -> str:
        role = self._user_repo.get_user_role(user_id)
        if not role:
            raise NoUserError()
        return role