"""In-memory user repository for testing."""

from typing import Collection

from chemwiki.domain.model.user import User
from chemwiki.domain.repository.user import UserRepository
from chemwiki.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def save(self, user: User) -> User:
        """Store a user (test seeding)."""
        self._users[user.id] = user
        return user

    async def find_by_ids(self, user_ids: Collection[UserId]) -> dict[UserId, User]:
        """Find users by ID (batch query)."""
        return {
            user_id: self._users[user_id]
            for user_id in user_ids
            if user_id in self._users
        }
