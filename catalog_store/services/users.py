"""
User profiles in the shared ``users`` collection.

Lookups by id or email return None for unknown users. Sign-in credentials
are not handled here.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from catalog_store.contracts.records import User, utcnow
from catalog_store.database.collections import USERS
from catalog_store.errors import InvalidArgument
from catalog_store.services.base import CollectionService, new_id

logger = logging.getLogger(__name__)

_READ_ONLY_FIELDS = frozenset({"id", "created_at"})


def _same_email(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


class UserService(CollectionService):
    async def list_users(self) -> List[User]:
        return await self._load(USERS)

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self._find(USERS, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive email lookup."""
        users = await self._load(USERS)
        return next((u for u in users if _same_email(u.email, email)), None)

    async def create_user(self, email: str, name: str, **fields: Any) -> User:
        """
        Register a new user with a fresh id. Extra keyword arguments are any
        other User fields (phone, addresses, preferences...).

        Raises:
            InvalidArgument: another user already has this email.
        """
        users = await self._load(USERS)
        if any(_same_email(u.email, email) for u in users):
            raise InvalidArgument(f"A user with email {email!r} already exists")

        user = User(id=new_id(), email=email, name=name, **fields)
        users.append(user)
        await self._save(USERS, users)
        logger.info("Created user %s", user.id)
        return user

    async def update_user(self, user_id: str, **changes: Any) -> Optional[User]:
        """
        Merge ``changes`` into the stored user; fields not named keep their
        value. Returns None when the user is unknown.

        Raises:
            InvalidArgument: a change names an unknown or read-only field.
        """
        unknown = set(changes) - set(User.model_fields)
        if unknown:
            raise InvalidArgument(f"Unknown user fields: {sorted(unknown)}")
        if _READ_ONLY_FIELDS.intersection(changes):
            raise InvalidArgument("id and created_at cannot be changed")

        users = await self._load(USERS)
        for i, user in enumerate(users):
            if user.id == user_id:
                users[i] = User.model_validate({**user.model_dump(), **changes, "updated_at": utcnow()})
                await self._save(USERS, users)
                return users[i]
        return None
