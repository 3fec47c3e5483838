"""Business rules around films."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from filmoteka.entities import Film
from filmoteka.film_repo import FilmRepo


class FilmsNotFoundError(LookupError):
    """No films matched a search."""

    def __init__(self, message: str = "films for this search were not found") -> None:
        super().__init__(message)


class FilmNotFoundError(LookupError):
    """A film with the requested id does not exist."""

    def __init__(self, message: str = "film with such id does not exist") -> None:
        super().__init__(message)


class BadFilmUpdateDataError(ValueError):
    """The data given to update a film was rejected."""

    def __init__(self, message: str = "invalid data to update film") -> None:
        super().__init__(message)


class BadFilmAddDataError(ValueError):
    """The data given to add a film was rejected."""

    def __init__(self, message: str = "invalid data to add film") -> None:
        super().__init__(message)


class FilmUseCase:
    """Film operations on top of a film repository."""

    def __init__(self, film_repo: FilmRepo) -> None:
        self._film_repo = film_repo

    def get_films(self, sort_param: str) -> list[Film]:
        return self._film_repo.get_films(sort_param)

    def get_film_by_id(self, film_id: int) -> Film:
        film = self._film_repo.get_film_by_id(film_id)
        if film is None:
            raise FilmNotFoundError()
        return film

    def add_film(self, film: Film, actor_ids: Iterable[int]) -> Film:
        film_id = self._film_repo.add_film(film, actor_ids)
        if film_id == 0:
            raise BadFilmAddDataError()
        return replace(film, id=film_id)

    def update_film(self, film: Film, actor_ids: Iterable[int]) -> None:
        if not self._film_repo.update_film(film, actor_ids):
            raise BadFilmUpdateDataError()

    def get_films_by_search(self, search_str: str) -> list[Film]:
        films = self._film_repo.get_films_by_search(search_str)
        if not films:
            raise FilmsNotFoundError()
        return films

    def delete_film(self, film_id: int) -> None:
        if not self._film_repo.delete_film(film_id):
            raise FilmNotFoundError()