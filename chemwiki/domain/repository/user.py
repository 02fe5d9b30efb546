"""User directory interface."""

from abc import ABC, abstractmethod
from typing import Collection, Dict

from chemwiki.domain.model.user import User
from chemwiki.domain.value import UserId


class UserRepository(ABC):
    """Read-only port to the identity provider's user directory."""

    @abstractmethod
    async def find_by_ids(self, user_ids: Collection[UserId]) -> Dict[UserId, User]:
        """Find users by ID (batch query).

        Args:
            user_ids: IDs to look up

        Returns:
            Mapping of found IDs to users; unknown IDs are absent
        """
        pass
