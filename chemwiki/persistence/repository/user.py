"""PostgreSQL implementation of User repository."""

from typing import Collection, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chemwiki.domain.model import User
from chemwiki.domain.repository import UserRepository
from chemwiki.domain.value import UserId
from chemwiki.persistence.mappers import row_to_user
from chemwiki.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_ids(self, user_ids: Collection[UserId]) -> Dict[UserId, User]:
        """Find users by ID (batch query)."""
        if not user_ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self.session.execute(stmt)

        users = [row_to_user(row._asdict()) for row in result.fetchall()]
        return {user.id: user for user in users}
