# filmorate/tests/conftest.py
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from filmorate.db.crud.films import SqlFilmStore
from filmorate.db.crud.memory import (
    InMemoryFilmStore,
    InMemoryGenreStore,
    InMemoryMpaStore,
    InMemoryUserStore,
)
from filmorate.db.crud.users import SqlUserStore
from filmorate.db.ensure_schema import ensure_schema
from filmorate.db.session import build_engine, build_sessionmaker, get_async_session
from filmorate.main import app
from filmorate.schemas import Film, Genre, Mpa, User
from filmorate.services.films import FilmService
from filmorate.services.users import UserService


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite per test, foreign keys on, reference rows seeded."""
    eng = build_engine("sqlite+aiosqlite://", poolclass=StaticPool, echo=False)
    await ensure_schema(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
async def session(engine):
    async with build_sessionmaker(engine)() as s:
        yield s


@pytest.fixture
def film_store(session):
    return SqlFilmStore(session)


@pytest.fixture
def user_store(session):
    return SqlUserStore(session)


@pytest.fixture
def memory_services():
    """FilmService / UserService wired to the in-memory stores."""
    users = InMemoryUserStore()
    films = InMemoryFilmStore(InMemoryGenreStore(), InMemoryMpaStore(), users)
    return FilmService(films, users), UserService(users)


@pytest.fixture
async def client(engine):
    maker = build_sessionmaker(engine)

    async def _session_override():
        async with maker() as s:
            yield s

    app.dependency_overrides[get_async_session] = _session_override
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_film():
    def _make(**overrides) -> Film:
        data = dict(
            name="Фильм 1",
            description="Описание",
            release_date=date(2000, 1, 1),
            duration=120,
            mpa=Mpa(id=1),
            genres=[Genre(id=1)],
        )
        data.update(overrides)
        return Film(**data)

    return _make


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def _make(**overrides) -> User:
        counter["n"] += 1
        n = counter["n"]
        data = dict(
            email=f"user{n}@example.com",
            login=f"user{n}",
            name=f"User {n}",
            birthday=date(1990, 1, n),
        )
        data.update(overrides)
        return User(**data)

    return _make
