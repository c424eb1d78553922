# filmorate/services/users.py
from __future__ import annotations

import logging
from typing import List

from filmorate.exceptions import ContentNotFoundError, DomainValidationError, NotFoundError
from filmorate.schemas import User
from filmorate.services.relations import ensure_distinct_users
from filmorate.services.validation import validate_user

log = logging.getLogger(__name__)


class UserService:
    """
    User use cases. Friendship is a directed edge: adding B to A's friends
    does not add A to B's, and mutual friends intersect outgoing edges only.
    """

    def __init__(self, users):
        self.users = users

    async def _require_user(self, user_id: int) -> None:
        if not await self.users.user_exists(user_id):
            log.warning("User with ID %s not found", user_id)
            raise NotFoundError(f"User with ID {user_id} not found")

    async def create(self, user: User) -> User:
        validate_user(user)
        created = await self.users.add_user(user)
        log.info("Created user with ID: %s", created.id)
        return created

    async def update(self, user: User) -> User:
        validate_user(user)
        if user.id is None:
            raise DomainValidationError("User id is required for update")
        await self._require_user(user.id)
        updated = await self.users.update_user(user)
        log.info("Updated user with ID: %s", updated.id)
        return updated

    async def get_user(self, user_id: int) -> User:
        user = await self.users.get_user_by_id(user_id)
        if user is None:
            log.warning("User with ID %s not found", user_id)
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    async def get_all_users(self) -> List[User]:
        log.info("Getting all users")
        return await self.users.get_users()

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        try:
            ensure_distinct_users(user_id, friend_id)
        except DomainValidationError:
            log.warning("Attempt to add self as a friend: user_id=%s", user_id)
            raise
        await self._require_user(user_id)
        await self._require_user(friend_id)
        if await self.users.friendship_exists(user_id, friend_id):
            log.warning("User %s already has user %s as a friend", user_id, friend_id)
            raise DomainValidationError(f"User {friend_id} is already a friend of user {user_id}")
        await self.users.add_friend(user_id, friend_id)
        log.info("User %s added user %s as a friend", user_id, friend_id)

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        try:
            ensure_distinct_users(user_id, friend_id)
        except DomainValidationError:
            log.warning("Attempt to remove self as a friend: user_id=%s", user_id)
            raise
        await self._require_user(user_id)
        await self._require_user(friend_id)
        if not await self.users.remove_friend(user_id, friend_id):
            log.warning("User %s is not a friend of user %s", friend_id, user_id)
            raise ContentNotFoundError(f"User {friend_id} is not a friend of user {user_id}")
        log.info("User %s removed user %s from friends", user_id, friend_id)

    async def get_friends(self, user_id: int) -> List[User]:
        await self._require_user(user_id)
        log.info("Getting friends list for user %s", user_id)
        return await self.users.get_friends(user_id)

    async def get_common_friends(self, user_id: int, other_id: int) -> List[User]:
        await self._require_user(user_id)
        await self._require_user(other_id)
        log.info("Getting mutual friends of users %s and %s", user_id, other_id)
        return await self.users.get_common_friends(user_id, other_id)
