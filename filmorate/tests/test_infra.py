import logging

import pytest
from sqlalchemy import select

from filmorate.core.logging import configure_logging
from filmorate.core.settings import Settings
from filmorate.db.ensure_schema import GENRE_SEED, MPA_SEED, seed_reference_data
from filmorate.db.models import GenreRow, MpaRow
from filmorate.db.session import _normalise_url, _to_async_driver
from filmorate.exceptions import (
    ContentNotFoundError,
    DomainValidationError,
    NotFoundError,
    StorageIntegrityError,
)
from filmorate.main import status_for


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("postgres://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("postgresql+psycopg://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("postgresql+asyncpg://u:p@db/x", "postgresql+asyncpg://u:p@db/x"),
        ("sqlite:///./films.db", "sqlite+aiosqlite:///./films.db"),
    ],
)
def test_to_async_driver(url, expected):
    assert _to_async_driver(url) == expected


def test_normalise_url_strips_quotes():
    assert _normalise_url(' "sqlite://" ') == "sqlite://"
    assert _normalise_url("") is None


def test_settings_read_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("TOP_FILMS_DEFAULT", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings()
    assert s.database_url == "sqlite://"
    assert s.top_films_default == 3
    assert s.log_level == "debug"


def test_configure_logging_accepts_names():
    configure_logging("debug")
    assert logging.getLogger("filmorate").level == logging.DEBUG
    configure_logging("nonsense")
    assert logging.getLogger("filmorate").level == logging.INFO


@pytest.mark.parametrize(
    "exc, status",
    [
        (NotFoundError("x"), 404),
        (ContentNotFoundError("x"), 404),
        (DomainValidationError("x"), 400),
        (StorageIntegrityError("x"), 409),
    ],
)
def test_status_for(exc, status):
    assert status_for(exc) == status


async def test_seed_is_idempotent(session):
    assert await seed_reference_data(session) == 0
    mpa = (await session.execute(select(MpaRow.name).order_by(MpaRow.id))).scalars().all()
    genres = (await session.execute(select(GenreRow.id).order_by(GenreRow.id))).scalars().all()
    assert mpa == [name for _, name in MPA_SEED]
    assert genres == [gid for gid, _ in GENRE_SEED]
