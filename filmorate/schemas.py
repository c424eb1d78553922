# filmorate/schemas.py
from __future__ import annotations

from datetime import date
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field

MIN_RELEASE_DATE = date(1895, 12, 28)
MAX_DESCRIPTION_LENGTH = 200


# =========================
# Reference data
# =========================

class Mpa(BaseModel):
    """
    MPA content rating (G, PG, PG-13, ...).
    `name` may be omitted when a client only references a rating by id.
    """
    id: int
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Genre(BaseModel):
    id: int
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# =========================
# Films & Users
# =========================

class Film(BaseModel):
    """
    Film aggregate: scalar columns, its MPA rating, its genres (unique by id,
    ascending) and the ids of users who liked it.
    Equality and hashing look at `id` only.
    """
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    release_date: Optional[date] = Field(default=None, alias="releaseDate")
    duration: int = 0
    mpa: Optional[Mpa] = None
    genres: List[Genre] = Field(default_factory=list)
    likes: Set[int] = Field(default_factory=set)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Film):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("film", self.id))


class User(BaseModel):
    """
    User aggregate. `friends` holds the ids on the far side of this user's
    outgoing friend edges. Equality and hashing look at `id` only.
    """
    id: Optional[int] = None
    email: str = ""
    login: str = ""
    name: Optional[str] = None
    birthday: Optional[date] = None
    friends: Set[int] = Field(default_factory=set)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("user", self.id))


__all__ = [
    "MIN_RELEASE_DATE",
    "MAX_DESCRIPTION_LENGTH",
    "Mpa",
    "Genre",
    "Film",
    "User",
]
