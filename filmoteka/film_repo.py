"""Storage of films and their cast in a relational database."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from filmoteka.entities import Film

DEFAULT_SORT_PARAM = "rating"

_FILM_COLUMNS = "f.id, f.name, f.description, f.date_of_release, f.rating"

_SEARCH_QUERY = """
    SELECT DISTINCT f.id, f.name, f.description, f.date_of_release, f.rating
    FROM films f
    LEFT JOIN film_actors fa ON f.id = fa.film_id
    LEFT JOIN actors a ON fa.actor_id = a.id
    WHERE LOWER(f.name) LIKE LOWER('%' || ? || '%')
    OR LOWER(a.name || ' ' || a.surname) LIKE LOWER('%' || ? || '%');
"""


class FilmRepo(ABC):
    """Persistent storage of films."""

    @abstractmethod
    def get_films(self, sort_param: str) -> list[Film]:
        """Return all films ordered by ``sort_param`` descending."""

    @abstractmethod
    def get_film_by_id(self, film_id: int) -> Film | None:
        """Return the film with ``film_id`` or None."""

    @abstractmethod
    def add_film(self, film: Film, actor_ids: Iterable[int]) -> int:
        """Store a film with its cast; return the new id, or 0 if an actor is unknown."""

    @abstractmethod
    def update_film(self, film: Film, actor_ids: Iterable[int]) -> bool:
        """Replace a film's data and cast; return False if an actor is unknown."""

    @abstractmethod
    def get_films_by_search(self, search_str: str) -> list[Film]:
        """Return films whose title or actor's full name contains ``search_str``."""

    @abstractmethod
    def delete_film(self, film_id: int) -> bool:
        """Delete a film; return whether anything was deleted."""


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _film_from_row(row: Sequence[Any]) -> Film:
    film_id, name, description, date_of_release, rating = row
    return Film(
        id=int(film_id),
        name=name,
        description=description,
        date_of_release=_as_datetime(date_of_release),
        rating=float(rating),
    )


class FilmRepoDB(FilmRepo):
    """Film storage over a DB-API 2.0 connection using the qmark parameter style."""

    def __init__(self, db: Any, logger: logging.Logger | logging.LoggerAdapter | None) -> None:
        self._db = db
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    def _fetch_all(self, query: str, params: Sequence[Any] = ()) -> list[Any]:
        cursor = self._db.cursor()
        try:
            cursor.execute(query, tuple(params))
            return list(cursor.fetchall())
        finally:
            cursor.close()

    def _rollback(self) -> None:
        try:
            self._db.rollback()
        except Exception:
            self._logger.error("error in transaction rollback")

    def get_films(self, sort_param: str) -> list[Film]:
        if not sort_param:
            sort_param = DEFAULT_SORT_PARAM
        rows = self._fetch_all(
            f"SELECT {_FILM_COLUMNS} FROM films f ORDER BY {sort_param} DESC"
        )
        return [_film_from_row(row) for row in rows]

    def get_film_by_id(self, film_id: int) -> Film | None:
        rows = self._fetch_all(
            "SELECT id, name, description, date_of_release, rating FROM films WHERE id = ?",
            (film_id,),
        )
        return _film_from_row(rows[0]) if rows else None

    def _link_actors(self, cursor: Any, film_id: int, actor_ids: Iterable[int]) -> bool:
        for actor_id in actor_ids:
            cursor.execute("SELECT id FROM actors WHERE id = ?", (actor_id,))
            if cursor.fetchone() is None:
                return False
            cursor.execute(
                "INSERT INTO film_actors (film_id, actor_id) VALUES (?, ?)",
                (film_id, actor_id),
            )
        return True

    def add_film(self, film: Film, actor_ids: Iterable[int]) -> int:
        cursor = self._db.cursor()
        try:
            cursor.execute(
                "INSERT INTO films (name, description, date_of_release, rating) "
                "VALUES (?, ?, ?, ?) RETURNING id",
                (film.name, film.description, film.date_of_release, film.rating),
            )
            film_id = int(cursor.fetchone()[0])
            if not self._link_actors(cursor, film_id, actor_ids):
                self._rollback()
                return 0
            self._db.commit()
        except Exception:
            self._rollback()
            raise
        finally:
            cursor.close()
        return film_id

    def update_film(self, film: Film, actor_ids: Iterable[int]) -> bool:
        cursor = self._db.cursor()
        try:
            cursor.execute(
                "UPDATE films SET name = ?, description = ?, date_of_release = ?, rating = ? "
                "WHERE id = ?",
                (film.name, film.description, film.date_of_release, film.rating, film.id),
            )
            cursor.execute("DELETE FROM film_actors WHERE film_id = ?", (film.id,))
            if not self._link_actors(cursor, film.id, actor_ids):
                self._rollback()
                return False
            self._db.commit()
        except Exception:
            self._rollback()
            raise
        finally:
            cursor.close()
        return True

    def get_films_by_search(self, search_str: str) -> list[Film]:
        rows = self._fetch_all(_SEARCH_QUERY, (search_str, search_str))
        return [_film_from_row(row) for row in rows]

    def delete_film(self, film_id: int) -> bool:
        cursor = self._db.cursor()
        try:
            cursor.execute("DELETE FROM films WHERE id = ?", (film_id,))
            affected = cursor.rowcount
            self._db.commit()
        except Exception:
            self._rollback()
            raise
        finally:
            cursor.close()
        return affected > 0