# filmorate/services/reference.py
from __future__ import annotations

import logging
from typing import List

from filmorate.exceptions import NotFoundError
from filmorate.schemas import Genre, Mpa

log = logging.getLogger(__name__)


class ReferenceService:
    """Genre and MPA lookups; absence turns into NotFound here, not in the stores."""

    def __init__(self, genres, mpa):
        self.genres = genres
        self.mpa = mpa

    async def get_all_genres(self) -> List[Genre]:
        genres = await self.genres.get_all()
        log.info("Returning %d genres", len(genres))
        return genres

    async def get_genre_by_id(self, genre_id: int) -> Genre:
        genre = await self.genres.get_by_id(genre_id)
        if genre is None:
            log.warning("Genre with ID %s not found", genre_id)
            raise NotFoundError(f"Genre with ID {genre_id} not found")
        return genre

    async def get_all_mpa(self) -> List[Mpa]:
        ratings = await self.mpa.get_all()
        log.info("Returning %d MPA ratings", len(ratings))
        return ratings

    async def get_mpa_by_id(self, mpa_id: int) -> Mpa:
        rating = await self.mpa.get_by_id(mpa_id)
        if rating is None:
            log.warning("MPA with ID %s not found", mpa_id)
            raise NotFoundError(f"MPA with ID {mpa_id} not found")
        return rating
