# filmorate/dependencies.py
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate.db.crud.films import SqlFilmStore
from filmorate.db.crud.reference import SqlGenreStore, SqlMpaStore
from filmorate.db.crud.users import SqlUserStore
from filmorate.db.session import get_async_session
from filmorate.services.films import FilmService
from filmorate.services.reference import ReferenceService
from filmorate.services.users import UserService


def get_film_service(db: AsyncSession = Depends(get_async_session)) -> FilmService:
    return FilmService(SqlFilmStore(db), SqlUserStore(db))


def get_user_service(db: AsyncSession = Depends(get_async_session)) -> UserService:
    return UserService(SqlUserStore(db))


def get_reference_service(db: AsyncSession = Depends(get_async_session)) -> ReferenceService:
    return ReferenceService(SqlGenreStore(db), SqlMpaStore(db))
