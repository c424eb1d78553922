# filmorate/db/crud/memory.py
"""
Dict-backed stores with the same async surface as the SQL ones.

Each store owns an id-indexed arena behind one asyncio.Lock and hands out
ids from a counter that lives as long as the arena. Constraint violations
the database would reject (duplicate relation rows, dangling references)
raise StorageIntegrityError here too. Test double only.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from filmorate.db.ensure_schema import GENRE_SEED, MPA_SEED
from filmorate.exceptions import DomainValidationError, NotFoundError, StorageIntegrityError
from filmorate.schemas import Film, Genre, Mpa, User
from filmorate.services.relations import common_friend_ids, rank_films, unique_genre_ids

log = logging.getLogger(__name__)


class _InMemoryReferenceStore:
    schema = None  # type: ignore[assignment]

    def __init__(self, seed: Iterable[Tuple[int, str]]):
        self._rows = {row_id: self.schema(id=row_id, name=name) for row_id, name in seed}

    async def get_all(self) -> List:
        return [self._rows[k].model_copy() for k in sorted(self._rows)]

    async def get_by_id(self, item_id: int) -> Optional:
        row = self._rows.get(item_id)
        return row.model_copy() if row else None

    async def get_by_ids(self, ids: Iterable[int]) -> List:
        return [self._rows[k].model_copy() for k in sorted(set(ids)) if k in self._rows]


class InMemoryGenreStore(_InMemoryReferenceStore):
    schema = Genre

    def __init__(self, seed: Iterable[Tuple[int, str]] = GENRE_SEED):
        super().__init__(seed)


class InMemoryMpaStore(_InMemoryReferenceStore):
    schema = Mpa

    def __init__(self, seed: Iterable[Tuple[int, str]] = MPA_SEED):
        super().__init__(seed)


class InMemoryUserStore:
    def __init__(self):
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self._users: Dict[int, User] = {}
        self._edges: Dict[int, Set[int]] = {}

    def _snapshot(self, user_id: int) -> User:
        user = self._users[user_id].model_copy(deep=True)
        user.friends = set(self._edges.get(user_id, ()))
        return user

    async def add_user(self, user: User) -> User:
        async with self._lock:
            user_id = next(self._ids)
            self._users[user_id] = user.model_copy(update={"id": user_id, "friends": set()}, deep=True)
            self._edges[user_id] = set()
            log.debug("User created with id: %s", user_id)
            return self._snapshot(user_id)

    async def update_user(self, user: User) -> User:
        async with self._lock:
            if user.id not in self._users:
                raise NotFoundError(f"User with ID {user.id} not found")
            self._users[user.id] = user.model_copy(update={"friends": set()}, deep=True)
            log.debug("User updated with id: %s", user.id)
            return self._snapshot(user.id)

    async def user_exists(self, user_id: int) -> bool:
        return user_id in self._users

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        async with self._lock:
            return self._snapshot(user_id) if user_id in self._users else None

    async def get_users(self) -> List[User]:
        async with self._lock:
            return [self._snapshot(k) for k in sorted(self._users)]

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        async with self._lock:
            if user_id not in self._users or friend_id not in self._users:
                raise StorageIntegrityError(f"Friendship ({user_id}, {friend_id}) references a missing user")
            if user_id == friend_id:
                raise StorageIntegrityError("Friendship cannot point at its own user")
            edges = self._edges[user_id]
            if friend_id in edges:
                raise StorageIntegrityError(f"Friendship ({user_id}, {friend_id}) already stored")
            edges.add(friend_id)

    async def remove_friend(self, user_id: int, friend_id: int) -> bool:
        async with self._lock:
            edges = self._edges.get(user_id, set())
            if friend_id not in edges:
                return False
            edges.discard(friend_id)
            return True

    async def friendship_exists(self, user_id: int, friend_id: int) -> bool:
        return friend_id in self._edges.get(user_id, ())

    async def get_friends(self, user_id: int) -> List[User]:
        async with self._lock:
            return [self._snapshot(k) for k in sorted(self._edges.get(user_id, ()))]

    async def get_common_friends(self, user_id: int, other_id: int) -> List[User]:
        async with self._lock:
            ids = common_friend_ids(self._edges.get(user_id, ()), self._edges.get(other_id, ()))
            return [self._snapshot(k) for k in ids]


class InMemoryFilmStore:
    def __init__(
        self,
        genres: Optional[InMemoryGenreStore] = None,
        mpa: Optional[InMemoryMpaStore] = None,
        users: Optional[InMemoryUserStore] = None,
    ):
        self.genres = genres or InMemoryGenreStore()
        self.mpa = mpa or InMemoryMpaStore()
        self.users = users
        self._lock = asyncio.Lock()
        self._ids = itertools.count(1)
        self._films: Dict[int, Film] = {}
        self._genre_ids: Dict[int, List[int]] = {}
        self._likes: Dict[int, Set[int]] = {}

    async def _check_references(self, film: Film) -> List[int]:
        if film.mpa is None:
            raise DomainValidationError("MPA rating is required")
        if await self.mpa.get_by_id(film.mpa.id) is None:
            raise NotFoundError(f"MPA with ID {film.mpa.id} not found")
        genre_ids = unique_genre_ids(film.genres)
        found = {g.id for g in await self.genres.get_by_ids(genre_ids)}
        missing = [gid for gid in genre_ids if gid not in found]
        if missing:
            raise NotFoundError(f"Genre with ID {', '.join(map(str, missing))} not found")
        return genre_ids

    async def _snapshot(self, film_id: int) -> Film:
        film = self._films[film_id].model_copy(deep=True)
        film.mpa = await self.mpa.get_by_id(film.mpa.id) if film.mpa else None
        film.genres = await self.genres.get_by_ids(self._genre_ids[film_id])
        film.likes = set(self._likes[film_id])
        return film

    async def add_film(self, film: Film) -> Film:
        genre_ids = await self._check_references(film)
        async with self._lock:
            film_id = next(self._ids)
            self._films[film_id] = film.model_copy(update={"id": film_id}, deep=True)
            self._genre_ids[film_id] = genre_ids
            self._likes[film_id] = set()
            log.debug("Film created with id: %s", film_id)
            return await self._snapshot(film_id)

    async def update_film(self, film: Film) -> Film:
        if film.id not in self._films:
            raise NotFoundError(f"Film with ID {film.id} not found")
        genre_ids = await self._check_references(film)
        async with self._lock:
            self._films[film.id] = film.model_copy(deep=True)
            self._genre_ids[film.id] = genre_ids
            log.debug("Film updated with id: %s", film.id)
            return await self._snapshot(film.id)

    async def film_exists(self, film_id: int) -> bool:
        return film_id in self._films

    async def get_film_by_id(self, film_id: int) -> Optional[Film]:
        async with self._lock:
            return await self._snapshot(film_id) if film_id in self._films else None

    async def get_films(self) -> List[Film]:
        async with self._lock:
            return [await self._snapshot(k) for k in sorted(self._films)]

    async def get_top_films(self, count: int) -> List[Film]:
        async with self._lock:
            ranked = rank_films({k: len(v) for k, v in self._likes.items()}, count)
            return [await self._snapshot(k) for k in ranked]

    async def add_like(self, film_id: int, user_id: int) -> None:
        async with self._lock:
            if film_id not in self._films:
                raise StorageIntegrityError(f"Like references missing film {film_id}")
            if self.users is not None and not await self.users.user_exists(user_id):
                raise StorageIntegrityError(f"Like references missing user {user_id}")
            likes = self._likes[film_id]
            if user_id in likes:
                raise StorageIntegrityError(f"Like ({film_id}, {user_id}) already stored")
            likes.add(user_id)

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        async with self._lock:
            likes = self._likes.get(film_id, set())
            if user_id not in likes:
                return False
            likes.discard(user_id)
            return True

    async def like_exists(self, film_id: int, user_id: int) -> bool:
        return user_id in self._likes.get(film_id, ())


__all__ = [
    "InMemoryGenreStore",
    "InMemoryMpaStore",
    "InMemoryUserStore",
    "InMemoryFilmStore",
]
