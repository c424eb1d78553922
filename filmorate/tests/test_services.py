from datetime import date

import pytest

from filmorate.exceptions import ContentNotFoundError, DomainValidationError, NotFoundError
from filmorate.schemas import Genre, Mpa
from filmorate.services.films import FilmService
from filmorate.services.users import UserService
from filmorate.db.crud.films import SqlFilmStore
from filmorate.db.crud.users import SqlUserStore


@pytest.fixture(params=["memory", "sql"])
def services(request, memory_services, session):
    """Run each service test against both store implementations."""
    if request.param == "memory":
        return memory_services
    users = SqlUserStore(session)
    return FilmService(SqlFilmStore(session), users), UserService(users)


async def test_film_like_scenario(services, make_film, make_user):
    films, users = services
    user = await users.create(make_user())
    film = await films.create(make_film(name="Фильм 1", release_date=date(2000, 1, 1), duration=120, genres=[Genre(id=1)]))

    assert film.id is not None
    assert [(g.id, g.name) for g in film.genres] == [(1, "Комедия")]
    assert film.likes == set()

    await films.add_like(film.id, user.id)
    assert await films.like_exists(film.id, user.id)
    assert (await films.get_film(film.id)).likes == {user.id}

    await films.remove_like(film.id, user.id)
    assert not await films.like_exists(film.id, user.id)


async def test_like_errors_are_distinguished(services, make_film, make_user):
    films, users = services
    user = await users.create(make_user())
    film = await films.create(make_film())

    await films.add_like(film.id, user.id)
    with pytest.raises(DomainValidationError):
        await films.add_like(film.id, user.id)

    await films.remove_like(film.id, user.id)
    with pytest.raises(ContentNotFoundError):
        await films.remove_like(film.id, user.id)

    with pytest.raises(NotFoundError):
        await films.add_like(999, user.id)
    with pytest.raises(NotFoundError):
        await films.remove_like(film.id, 999)


async def test_create_rejects_before_touching_storage(services, make_film):
    films, _ = services
    with pytest.raises(DomainValidationError):
        await films.create(make_film(release_date=date(1800, 1, 1)))
    with pytest.raises(NotFoundError, match="MPA with ID 999"):
        await films.create(make_film(mpa=Mpa(id=999)))
    assert await films.get_all_films() == []


async def test_update_film(services, make_film):
    films, _ = services
    film = await films.create(make_film(genres=[Genre(id=2), Genre(id=1), Genre(id=2)]))
    assert [g.id for g in film.genres] == [1, 2]

    updated = await films.update(film.model_copy(update={"description": "new", "genres": [Genre(id=6)]}))
    assert updated.description == "new"
    assert [(g.id, g.name) for g in updated.genres] == [(6, "Боевик")]

    with pytest.raises(NotFoundError):
        await films.update(make_film(id=777))
    with pytest.raises(NotFoundError):
        await films.get_film(777)


async def test_top_films_properties(services, make_film, make_user):
    films, users = services
    created = [await films.create(make_film(name=f"F{i}")) for i in range(3)]
    fans = [await users.create(make_user()) for _ in range(2)]
    await films.add_like(created[1].id, fans[0].id)
    await films.add_like(created[1].id, fans[1].id)
    await films.add_like(created[2].id, fans[0].id)

    for count in (1, 2, 3, 10):
        top = await films.get_top_films(count)
        assert len(top) == min(count, len(created))
        keys = [(-len(f.likes), f.id) for f in top]
        assert keys == sorted(keys)

    assert [f.id for f in await films.get_top_films(3)] == [created[1].id, created[2].id, created[0].id]

    for bad in (0, -1):
        with pytest.raises(DomainValidationError):
            await films.get_top_films(bad)


async def test_friend_scenario(services, make_user):
    _, users = services
    a, b, c = [await users.create(make_user()) for _ in range(3)]

    await users.add_friend(a.id, b.id)
    await users.add_friend(a.id, c.id)
    await users.add_friend(b.id, c.id)

    assert {u.id for u in await users.get_friends(a.id)} == {b.id, c.id}
    assert [u.id for u in await users.get_common_friends(a.id, b.id)] == [c.id]


async def test_common_friends_symmetric_and_matches_intersection(services, make_user):
    _, users = services
    people = [await users.create(make_user()) for _ in range(5)]
    a, b = people[0], people[1]
    for other in people[2:]:
        await users.add_friend(a.id, other.id)
    await users.add_friend(b.id, people[3].id)
    await users.add_friend(b.id, people[4].id)
    await users.add_friend(b.id, a.id)

    ab = [u.id for u in await users.get_common_friends(a.id, b.id)]
    ba = [u.id for u in await users.get_common_friends(b.id, a.id)]
    expected = {u.id for u in await users.get_friends(a.id)} & {u.id for u in await users.get_friends(b.id)}

    assert ab == ba == sorted(expected) == [people[3].id, people[4].id]


async def test_friend_errors(services, make_user):
    _, users = services
    a = await users.create(make_user())
    b = await users.create(make_user())

    with pytest.raises(DomainValidationError):
        await users.add_friend(a.id, a.id)
    with pytest.raises(DomainValidationError):
        await users.remove_friend(a.id, a.id)
    with pytest.raises(NotFoundError):
        await users.add_friend(a.id, 999)
    with pytest.raises(NotFoundError):
        await users.get_friends(999)
    with pytest.raises(NotFoundError):
        await users.get_common_friends(a.id, 999)

    await users.add_friend(a.id, b.id)
    with pytest.raises(DomainValidationError):
        await users.add_friend(a.id, b.id)

    await users.remove_friend(a.id, b.id)
    with pytest.raises(ContentNotFoundError):
        await users.remove_friend(a.id, b.id)


async def test_user_create_and_update(services, make_user):
    _, users = services
    created = await users.create(make_user(login="new_user", name=""))
    assert created.name == "new_user"

    updated = await users.update(created.model_copy(update={"email": "changed@example.com"}))
    assert updated.email == "changed@example.com"
    assert [u.id for u in await users.get_all_users()] == [created.id]

    with pytest.raises(DomainValidationError):
        await users.create(make_user(login="bad login"))
    with pytest.raises(NotFoundError):
        await users.update(make_user(id=999))
    with pytest.raises(NotFoundError):
        await users.get_user(999)
