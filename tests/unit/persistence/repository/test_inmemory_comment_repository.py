"""Unit tests for InMemoryCommentRepository."""

from uuid import uuid4

import pytest

from chemwiki.domain.error import StaleRecordError
from chemwiki.domain.value import VISIBLE_STATUSES, ArticleId, CommentId, CommentStatus
from chemwiki.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment


@pytest.fixture
def repo():
    return InMemoryCommentRepository()


class TestSave:
    """Tests for versioned saves."""

    @pytest.mark.asyncio
    async def test_save_increments_version(self, repo):
        # Arrange
        comment = await repo.create(make_comment(ArticleId(uuid4())))

        # Act
        saved = await repo.save(comment.model_copy(update={"content": "Edited"}))

        # Assert
        assert saved.version == 2
        stored = await repo.find_by_id(comment.id)
        assert stored.content == "Edited"
        assert stored.version == 2

    @pytest.mark.asyncio
    async def test_stale_version_rejected(self, repo):
        # Arrange
        comment = await repo.create(make_comment(ArticleId(uuid4())))
        await repo.save(comment.model_copy(update={"content": "First"}))

        # Act & Assert
        with pytest.raises(StaleRecordError):
            await repo.save(comment.model_copy(update={"content": "Second"}))
        stored = await repo.find_by_id(comment.id)
        assert stored.content == "First"

    @pytest.mark.asyncio
    async def test_save_of_missing_comment_rejected(self, repo):
        with pytest.raises(StaleRecordError):
            await repo.save(make_comment(ArticleId(uuid4())))


class TestDelete:
    """Tests for hard deletes."""

    @pytest.mark.asyncio
    async def test_delete_reports_whether_anything_was_removed(self, repo):
        # Arrange
        comment = await repo.create(make_comment(ArticleId(uuid4())))

        # Act & Assert
        assert await repo.delete(comment.id) is True
        assert await repo.delete(comment.id) is False
        assert await repo.delete(CommentId(uuid4())) is False


class TestQueries:
    """Tests for listing and counting."""

    @pytest.mark.asyncio
    async def test_find_by_article_oldest_first(self, repo):
        # Arrange
        article_id = ArticleId(uuid4())
        newer = await repo.create(make_comment(article_id, minutes=5))
        older = await repo.create(make_comment(article_id, minutes=1))
        await repo.create(make_comment(ArticleId(uuid4())))

        # Act
        comments = await repo.find_by_article(article_id)

        # Assert
        assert [c.id for c in comments] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_find_children_includes_every_status(self, repo):
        # Arrange
        article_id = ArticleId(uuid4())
        root = await repo.create(make_comment(article_id))
        spam = await repo.create(
            make_comment(article_id, parent=root, status=CommentStatus.SPAM, minutes=1)
        )
        deleted = await repo.create(
            make_comment(article_id, parent=root, status=CommentStatus.DELETED, minutes=2)
        )

        # Act
        children = await repo.find_children(root.id)

        # Assert
        assert [c.id for c in children] == [spam.id, deleted.id]

    @pytest.mark.asyncio
    async def test_find_all_newest_first_with_pagination(self, repo):
        # Arrange
        article_id = ArticleId(uuid4())
        created = [
            await repo.create(make_comment(article_id, minutes=minutes))
            for minutes in range(5)
        ]

        # Act
        first = await repo.find_all(limit=2, offset=0)
        rest = await repo.find_all(limit=10, offset=2)

        # Assert
        assert [c.id for c in first] == [created[4].id, created[3].id]
        assert [c.id for c in rest] == [c.id for c in reversed(created[:3])]

    @pytest.mark.asyncio
    async def test_counts(self, repo):
        # Arrange
        article_id = ArticleId(uuid4())
        await repo.create(make_comment(article_id))
        await repo.create(make_comment(article_id, status=CommentStatus.PENDING))
        await repo.create(make_comment(article_id, status=CommentStatus.SPAM))
        await repo.create(make_comment(article_id, status=CommentStatus.DELETED))
        await repo.create(make_comment(ArticleId(uuid4())))

        # Act & Assert
        assert await repo.count_by_article(article_id, VISIBLE_STATUSES) == 2
        assert await repo.count() == 5
        assert await repo.count(status=CommentStatus.SPAM) == 1
