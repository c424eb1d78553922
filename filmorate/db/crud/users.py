# filmorate/db/crud/users.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from filmorate.db.models import FRIENDSHIP_CONFIRMED, UserFriendRow, UserRow
from filmorate.exceptions import NotFoundError, StorageIntegrityError
from filmorate.schemas import User

log = logging.getLogger(__name__)


def _user_rows_query():
    return (
        select(
            UserRow.id.label("id"),
            UserRow.login.label("login"),
            UserRow.email.label("email"),
            UserRow.name.label("name"),
            UserRow.birthday.label("birthday"),
            UserFriendRow.friend_id.label("friend_id"),
        )
        .select_from(UserRow)
        .outerjoin(UserFriendRow, UserFriendRow.user_id == UserRow.id)
        .order_by(UserRow.id, UserFriendRow.friend_id)
    )


def fold_user_rows(rows: Iterable[Mapping[str, Any]]) -> List[User]:
    """One User per id, collecting the friend side of each outgoing edge."""
    users: Dict[int, User] = {}
    for row in rows:
        user = users.get(row["id"])
        if user is None:
            user = User(
                id=row["id"],
                login=row["login"],
                email=row["email"],
                name=row.get("name"),
                birthday=row.get("birthday"),
            )
            users[user.id] = user
        if row.get("friend_id") is not None:
            user.friends.add(row["friend_id"])
    return list(users.values())


def _friends_of(user_id: int):
    return select(UserFriendRow.friend_id).where(UserFriendRow.user_id == user_id)


class SqlUserStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, what: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(f"{what} rejected by storage: {e.orig}") from e

    async def _execute_write(self, stmt, what: str):
        try:
            return await self.db.execute(stmt)
        except IntegrityError as e:
            await self.db.rollback()
            raise StorageIntegrityError(f"{what} rejected by storage: {e.orig}") from e

    @staticmethod
    def _scalar_values(user: User) -> Dict[str, Any]:
        return dict(login=user.login, email=user.email, name=user.name, birthday=user.birthday)

    async def add_user(self, user: User) -> User:
        res = await self._execute_write(
            insert(UserRow).values(**self._scalar_values(user)).returning(UserRow.id), "User"
        )
        user_id = res.scalar_one()
        await self._commit("User")
        log.debug("User created with id: %s", user_id)
        return await self._require(user_id)

    async def update_user(self, user: User) -> User:
        if user.id is None or not await self.user_exists(user.id):
            raise NotFoundError(f"User with ID {user.id} not found")
        await self._execute_write(
            update(UserRow).where(UserRow.id == user.id).values(**self._scalar_values(user)), "User"
        )
        await self._commit("User")
        log.debug("User updated with id: %s", user.id)
        return await self._require(user.id)

    async def _require(self, user_id: int) -> User:
        user = await self.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    async def user_exists(self, user_id: int) -> bool:
        return bool((await self.db.execute(
            select(exists().where(UserRow.id == user_id))
        )).scalar())

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        rows = (await self.db.execute(
            _user_rows_query().where(UserRow.id == user_id)
        )).mappings().all()
        users = fold_user_rows(rows)
        return users[0] if users else None

    async def get_users(self) -> List[User]:
        rows = (await self.db.execute(_user_rows_query())).mappings().all()
        return fold_user_rows(rows)

    # --- friendships ---

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        await self._execute_write(
            insert(UserFriendRow).values(
                user_id=user_id, friend_id=friend_id, status=FRIENDSHIP_CONFIRMED
            ),
            f"Friendship ({user_id}, {friend_id})",
        )
        await self._commit(f"Friendship ({user_id}, {friend_id})")

    async def remove_friend(self, user_id: int, friend_id: int) -> bool:
        res = await self.db.execute(
            delete(UserFriendRow).where(
                (UserFriendRow.user_id == user_id) & (UserFriendRow.friend_id == friend_id)
            )
        )
        await self.db.commit()
        return (res.rowcount or 0) > 0

    async def friendship_exists(self, user_id: int, friend_id: int) -> bool:
        return bool((await self.db.execute(
            select(exists().where(
                (UserFriendRow.user_id == user_id) & (UserFriendRow.friend_id == friend_id)
            ))
        )).scalar())

    async def get_friends(self, user_id: int) -> List[User]:
        rows = (await self.db.execute(
            _user_rows_query().where(UserRow.id.in_(_friends_of(user_id)))
        )).mappings().all()
        return fold_user_rows(rows)

    async def get_common_friends(self, user_id: int, other_id: int) -> List[User]:
        rows = (await self.db.execute(
            _user_rows_query().where(
                UserRow.id.in_(_friends_of(user_id)) & UserRow.id.in_(_friends_of(other_id))
            )
        )).mappings().all()
        return fold_user_rows(rows)


__all__ = ["SqlUserStore", "fold_user_rows"]
