"""Domain records shared by the repositories, use cases and handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

# The zero point used when a film carries no release date.
EPOCH_ZERO = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass
class Film:
    """A film stored in the catalogue."""

    id: int = 0
    name: str = ""
    description: str = ""
    date_of_release: datetime = field(default=EPOCH_ZERO)
    rating: float = 0.0


@dataclass
class Session:
    """An authenticated session bound to a user."""

    id: str = ""
    user_id: int = 0


@dataclass
class User:
    """A registered user."""

    id: int = 0
    username: str = ""