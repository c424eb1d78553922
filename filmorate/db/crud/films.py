# filmorate/db/crud/films.py
"""
Film persistence over films / film_genres / film_likes.

Reads pull one flat outer-join result (film x mpa x genres x likes) and fold
it back into Film aggregates in a single pass, so listing N films costs one
query instead of N+1.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import delete, exists, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate.db.crud.reference import SqlGenreStore, SqlMpaStore
from filmorate.db.models import FilmGenreRow, FilmLikeRow, FilmRow, GenreRow, MpaRow
from filmorate.exceptions import DomainValidationError, NotFoundError, StorageIntegrityError
from filmorate.schemas import Film, Genre, Mpa
from filmorate.services.relations import ensure_positive_count, unique_genre_ids

log = logging.getLogger(__name__)


# --- row folding -----------------------------------------------------------

def _film_rows_query():
    return (
        select(
            FilmRow.id.label("id"),
            FilmRow.name.label("name"),
            FilmRow.description.label("description"),
            FilmRow.release_date.label("release_date"),
            FilmRow.duration.label("duration"),
            MpaRow.id.label("mpa_id"),
            MpaRow.name.label("mpa_name"),
            GenreRow.id.label("genre_id"),
            GenreRow.name.label("genre_name"),
            FilmLikeRow.like_user_id.label("like_user_id"),
        )
        .select_from(FilmRow)
        .outerjoin(MpaRow, FilmRow.mpa_id == MpaRow.id)
        .outerjoin(FilmGenreRow, FilmGenreRow.film_id == FilmRow.id)
        .outerjoin(GenreRow, GenreRow.id == FilmGenreRow.genre_id)
        .outerjoin(FilmLikeRow, FilmLikeRow.film_id == FilmRow.id)
        .order_by(FilmRow.id)
    )


def fold_film_rows(rows: Iterable[Mapping[str, Any]]) -> List[Film]:
    """
    Rebuild Film aggregates from flat join rows.

    The first row of a film supplies its scalars and MPA; every row may add
    one genre (skipped if null or already seen) and one like. Genres end up
    sorted by id, films keep the order of their first appearance.
    """
    films: Dict[int, Film] = {}
    seen_genres: Dict[int, set] = {}

    for row in rows:
        film_id = row["id"]
        film = films.get(film_id)
        if film is None:
            mpa = None
            if row.get("mpa_id") is not None:
                mpa = Mpa(id=row["mpa_id"], name=row.get("mpa_name"))
            film = Film(
                id=film_id,
                name=row["name"],
                description=row.get("description"),
                release_date=row.get("release_date"),
                duration=row["duration"],
                mpa=mpa,
            )
            films[film_id] = film
            seen_genres[film_id] = set()

        genre_id = row.get("genre_id")
        if genre_id is not None and genre_id not in seen_genres[film_id]:
            seen_genres[film_id].add(genre_id)
            film.genres.append(Genre(id=genre_id, name=row.get("genre_name")))

        like_user_id = row.get("like_user_id")
        if like_user_id is not None:
            film.likes.add(like_user_id)

    for film in films.values():
        film.genres.sort(key=lambda g: g.id)
    return list(films.values())


# --- store -----------------------------------------------------------------

class SqlFilmStore:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.genres = SqlGenreStore(db)
        self.mpa = SqlMpaStore(db)

    async def _check_references(self, film: Film) -> List[int]:
        """Fail with NotFound on an unknown MPA or genre id; return the unique genre ids."""
        if film.mpa is None:
            raise DomainValidationError("MPA rating is required")
        if await self.mpa.get_by_id(film.mpa.id) is None:
            raise NotFoundError(f"MPA with ID {film.mpa.id} not found")

        genre_ids = unique_genre_ids(film.genres)
        if genre_ids:
            found = {g.id for g in await self.genres.get_by_ids(genre_ids)}
            missing = [gid for gid in genre_ids if gid not in found]
            if missing:
                raise NotFoundError(f"Genre with ID {', '.join(map(str, missing))} not found")
        return genre_ids

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(f"Film write rejected by storage: {e.orig}") from e

    async def _insert_genres(self, film_id: int, genre_ids: List[int]) -> None:
        if genre_ids:
            await self.db.execute(
                insert(FilmGenreRow),
                [{"film_id": film_id, "genre_id": gid} for gid in genre_ids],
            )

    def _scalar_values(self, film: Film) -> Dict[str, Any]:
        return dict(
            name=film.name,
            description=film.description,
            release_date=film.release_date,
            mpa_id=film.mpa.id if film.mpa else None,
            duration=film.duration,
        )

    async def add_film(self, film: Film) -> Film:
        genre_ids = await self._check_references(film)
        try:
            film_id = (await self.db.execute(
                insert(FilmRow).values(**self._scalar_values(film)).returning(FilmRow.id)
            )).scalar_one()
            await self._insert_genres(film_id, genre_ids)
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(f"Film write rejected by storage: {e.orig}") from e
        await self._commit()
        log.debug("Film created with id: %s", film_id)
        return await self._require(film_id)

    async def update_film(self, film: Film) -> Film:
        if film.id is None or not await self.film_exists(film.id):
            raise NotFoundError(f"Film with ID {film.id} not found")
        genre_ids = await self._check_references(film)
        try:
            await self.db.execute(
                update(FilmRow).where(FilmRow.id == film.id).values(**self._scalar_values(film))
            )
            # replace the genre set inside the same transaction
            await self.db.execute(delete(FilmGenreRow).where(FilmGenreRow.film_id == film.id))
            await self._insert_genres(film.id, genre_ids)
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(f"Film write rejected by storage: {e.orig}") from e
        await self._commit()
        log.debug("Film updated with id: %s", film.id)
        return await self._require(film.id)

    async def _require(self, film_id: int) -> Film:
        film = await self.get_film_by_id(film_id)
        if film is None:
            raise NotFoundError(f"Film with ID {film_id} not found")
        return film

    async def film_exists(self, film_id: int) -> bool:
        return bool((await self.db.execute(
            select(exists().where(FilmRow.id == film_id))
        )).scalar())

    async def get_film_by_id(self, film_id: int) -> Optional[Film]:
        rows = (await self.db.execute(
            _film_rows_query().where(FilmRow.id == film_id)
        )).mappings().all()
        films = fold_film_rows(rows)
        return films[0] if films else None

    async def get_films(self) -> List[Film]:
        rows = (await self.db.execute(_film_rows_query())).mappings().all()
        return fold_film_rows(rows)

    async def get_top_films(self, count: int) -> List[Film]:
        ensure_positive_count(count)
        like_count = func.count(FilmLikeRow.like_user_id).label("like_count")
        ranked = (await self.db.execute(
            select(FilmRow.id, like_count)
            .select_from(FilmRow)
            .outerjoin(FilmLikeRow, FilmLikeRow.film_id == FilmRow.id)
            .group_by(FilmRow.id)
            .order_by(like_count.desc(), FilmRow.id.asc())
            .limit(count)
        )).all()
        ids = [r.id for r in ranked]
        if not ids:
            return []

        rows = (await self.db.execute(
            _film_rows_query().where(FilmRow.id.in_(ids))
        )).mappings().all()
        by_id = {f.id: f for f in fold_film_rows(rows)}
        return [by_id[i] for i in ids if i in by_id]

    # --- likes ---

    async def add_like(self, film_id: int, user_id: int) -> None:
        try:
            await self.db.execute(insert(FilmLikeRow).values(film_id=film_id, like_user_id=user_id))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(
                f"Like ({film_id}, {user_id}) rejected by storage: {e.orig}"
            ) from e

    async def remove_like(self, film_id: int, user_id: int) -> bool:
        res = await self.db.execute(
            delete(FilmLikeRow).where(
                (FilmLikeRow.film_id == film_id) & (FilmLikeRow.like_user_id == user_id)
            )
        )
        await self.db.commit()
        return (res.rowcount or 0) > 0

    async def like_exists(self, film_id: int, user_id: int) -> bool:
        return bool((await self.db.execute(
            select(exists().where(
                (FilmLikeRow.film_id == film_id) & (FilmLikeRow.like_user_id == user_id)
            ))
        )).scalar())


__all__ = ["SqlFilmStore", "fold_film_rows"]
