"""Password hashing strategies."""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod


class Hasher(ABC):
    """Turns a plain password into the form stored in the database."""

    @abstractmethod
    def get_hash_password(self, password: str) -> str:
        """Return the hashed representation of ``password``."""


class SHA256Hasher(Hasher):
    """Hashes passwords with SHA-256 and returns lowercase hex."""

    def get_hash_password(self, password: str) -> str:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()