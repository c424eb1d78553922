# filmorate/services/relations.py
"""
Pure rules over the like and friendship relations.

Nothing here touches storage: the SQL and in-memory stores and the domain
services call into these helpers so ranking, intersection and genre
normalisation behave the same whichever store is behind them.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping

from filmorate.exceptions import DomainValidationError
from filmorate.schemas import Genre


def ensure_positive_count(count: int) -> None:
    if count <= 0:
        raise DomainValidationError("Count must be greater than 0")


def rank_films(like_counts: Mapping[int, int], count: int) -> List[int]:
    """
    Film ids ordered by (likes desc, id asc), truncated to `count`.

    `like_counts` must carry every film, including those with zero likes;
    the id tie-break makes the order total.
    """
    ensure_positive_count(count)
    ordered = sorted(like_counts.items(), key=lambda item: (-item[1], item[0]))
    return [film_id for film_id, _ in ordered[:count]]


def common_friend_ids(friends_a: Iterable[int], friends_b: Iterable[int]) -> List[int]:
    """Ascending ids present in both outgoing friend sets."""
    return sorted(set(friends_a) & set(friends_b))


def unique_genre_ids(genres: Iterable[Genre]) -> List[int]:
    """Collapse a genre list to distinct ids, ascending."""
    return sorted({g.id for g in genres})


def ensure_distinct_users(user_id: int, friend_id: int) -> None:
    if user_id == friend_id:
        raise DomainValidationError("Cannot add/remove self as a friend")


__all__ = [
    "ensure_positive_count",
    "rank_films",
    "common_friend_ids",
    "unique_genre_ids",
    "ensure_distinct_users",
]
