# filmorate/services/films.py
from __future__ import annotations

import logging
from typing import List

from filmorate.exceptions import ContentNotFoundError, DomainValidationError, NotFoundError
from filmorate.schemas import Film
from filmorate.services.relations import ensure_positive_count
from filmorate.services.validation import validate_film

log = logging.getLogger(__name__)


class FilmService:
    """
    Film use cases. `films` is a SqlFilmStore or InMemoryFilmStore and
    `users` the matching user store; both are only reached through their
    async methods.
    """

    def __init__(self, films, users):
        self.films = films
        self.users = users

    async def _require_film(self, film_id: int) -> None:
        if not await self.films.film_exists(film_id):
            log.warning("Film with ID %s not found", film_id)
            raise NotFoundError(f"Film with ID {film_id} not found")

    async def _require_user(self, user_id: int) -> None:
        if not await self.users.user_exists(user_id):
            log.warning("User with ID %s not found", user_id)
            raise NotFoundError(f"User with ID {user_id} not found")

    async def create(self, film: Film) -> Film:
        validate_film(film)
        created = await self.films.add_film(film)
        log.info("Created film with ID: %s", created.id)
        return created

    async def update(self, film: Film) -> Film:
        validate_film(film)
        if film.id is None:
            raise DomainValidationError("Film id is required for update")
        await self._require_film(film.id)
        updated = await self.films.update_film(film)
        log.info("Updated film with ID: %s", updated.id)
        return updated

    async def get_film(self, film_id: int) -> Film:
        film = await self.films.get_film_by_id(film_id)
        if film is None:
            log.warning("Film with ID %s not found", film_id)
            raise NotFoundError(f"Film with ID {film_id} not found")
        return film

    async def get_all_films(self) -> List[Film]:
        log.info("Getting all films")
        return await self.films.get_films()

    async def get_top_films(self, count: int) -> List[Film]:
        try:
            ensure_positive_count(count)
        except DomainValidationError:
            log.warning("Invalid count value: %s", count)
            raise
        log.info("Getting %d popular films", count)
        return await self.films.get_top_films(count)

    async def add_like(self, film_id: int, user_id: int) -> None:
        await self._require_film(film_id)
        await self._require_user(user_id)
        if await self.films.like_exists(film_id, user_id):
            log.warning("User %s already liked film %s", user_id, film_id)
            raise DomainValidationError(f"User {user_id} already liked film {film_id}")
        await self.films.add_like(film_id, user_id)
        log.info("User %s liked film %s", user_id, film_id)

    async def remove_like(self, film_id: int, user_id: int) -> None:
        await self._require_film(film_id)
        await self._require_user(user_id)
        if not await self.films.remove_like(film_id, user_id):
            log.warning("User %s has no like on film %s to remove", user_id, film_id)
            raise ContentNotFoundError(f"User {user_id} has not liked film {film_id}")
        log.info("User %s removed like from film %s", user_id, film_id)

    async def like_exists(self, film_id: int, user_id: int) -> bool:
        return await self.films.like_exists(film_id, user_id)
