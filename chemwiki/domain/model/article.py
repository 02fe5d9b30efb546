"""Article record as seen from the discussion subsystem.

Articles are owned by the wiki's article host. Comments only anchor to them
and write back the derived ``comment_count``.
"""

from datetime import datetime

from pydantic import Field

from chemwiki.domain.model.common import DomainModel
from chemwiki.domain.value import ArticleId, Slug


class Article(DomainModel):
    """Article anchor for a discussion thread."""

    id: ArticleId
    slug: Slug
    title: str = Field(min_length=1, max_length=300)
    comment_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
