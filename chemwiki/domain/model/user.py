"""User directory entry.

Identity records belong to the identity provider; the discussion subsystem
reads them only to show author names.
"""

from datetime import datetime

from pydantic import Field

from chemwiki.domain.model.common import DomainModel
from chemwiki.domain.value import UserId, UserRole


class User(DomainModel):
    """Read-only view of a wiki user."""

    id: UserId
    username: str = Field(min_length=1, max_length=255)
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=datetime.now)
