"""Unit tests for ThreadBuilder."""

from itertools import permutations
from uuid import uuid4

import pytest

from chemwiki.domain.service import ThreadBuilder
from chemwiki.domain.service.vote_ledger import apply_toggle
from chemwiki.domain.value import ArticleId, CommentSort, CommentStatus, UserId, VoteDirection
from tests.conftest import make_comment


@pytest.fixture
def builder():
    return ThreadBuilder()


@pytest.fixture
def article_id():
    return ArticleId(uuid4())


def upvoted(comment, times):
    for _ in range(times):
        comment = apply_toggle(comment, UserId(uuid4()), VoteDirection.UP)
    return comment


class TestNesting:
    """Tests for grouping replies under their parents."""

    def test_chain_nests_regardless_of_input_order(self, builder, article_id):
        """[A, B(parent=A), C(parent=B)] always nests as A -> B -> C."""
        a = make_comment(article_id, content="A")
        b = make_comment(article_id, parent=a, content="B", minutes=1)
        c = make_comment(article_id, parent=b, content="C", minutes=2)

        for order in permutations([a, b, c]):
            # Act
            roots = builder.build(list(order))

            # Assert
            assert [n.comment.id for n in roots] == [a.id]
            assert [n.comment.id for n in roots[0].children] == [b.id]
            assert [n.comment.id for n in roots[0].children[0].children] == [c.id]
            assert roots[0].children[0].children[0].depth == 2

    def test_nodes_at_max_depth_are_excluded(self, builder, article_id):
        """Depth is counted from 0 at the root; depth max_depth is cut off."""
        # Arrange
        chain = [make_comment(article_id)]
        for i in range(1, 7):
            chain.append(make_comment(article_id, parent=chain[-1], minutes=i))

        # Act
        roots = builder.build(chain, max_depth=5)

        # Assert
        depth = 0
        node = roots[0]
        while node.children:
            node = node.children[0]
            depth += 1
        assert depth == 4
        assert node.child_count == 0

    def test_orphans_are_not_attached(self, builder, article_id):
        """A reply whose parent is missing from the input appears nowhere."""
        # Arrange
        root = make_comment(article_id)
        missing_parent = make_comment(article_id)
        orphan = make_comment(article_id, parent=missing_parent)

        # Act
        roots = builder.build([root, orphan])

        # Assert
        assert [n.comment.id for n in roots] == [root.id]
        assert roots[0].children == []

    def test_child_count_counts_rendered_replies(self, builder, article_id):
        # Arrange
        root = make_comment(article_id)
        replies = [make_comment(article_id, parent=root, minutes=i) for i in range(1, 4)]
        deleted_leaf = make_comment(
            article_id, parent=root, status=CommentStatus.DELETED, minutes=5
        )

        # Act
        roots = builder.build([root, *replies, deleted_leaf])

        # Assert
        assert roots[0].child_count == 3


class TestHiddenComments:
    """Tests for deleted and spam comments in the tree."""

    def test_deleted_leaf_is_omitted(self, builder, article_id):
        # Arrange
        root = make_comment(article_id)
        leaf = make_comment(article_id, parent=root, status=CommentStatus.DELETED)

        # Act
        roots = builder.build([root, leaf])

        # Assert
        assert roots[0].children == []

    def test_deleted_comment_with_replies_shows_placeholder(self, builder, article_id):
        # Arrange
        root = make_comment(article_id, content="secret", status=CommentStatus.DELETED)
        reply = make_comment(article_id, parent=root, content="still here", minutes=1)

        # Act
        roots = builder.build([root, reply])

        # Assert
        assert len(roots) == 1
        assert roots[0].content == "[Comment deleted]"
        assert roots[0].children[0].content == "still here"

    def test_spam_with_replies_shows_moderator_placeholder(self, builder, article_id):
        # Arrange
        root = make_comment(article_id, content="buy pills", status=CommentStatus.SPAM)
        reply = make_comment(article_id, parent=root, minutes=1)

        # Act
        roots = builder.build([root, reply])

        # Assert
        assert roots[0].content == "[Comment removed by moderator]"

    def test_spam_leaf_is_omitted(self, builder, article_id):
        # Arrange
        root = make_comment(article_id, status=CommentStatus.SPAM)

        # Act
        roots = builder.build([root])

        # Assert
        assert roots == []

    def test_hidden_chain_without_visible_replies_is_omitted(self, builder, article_id):
        """A deleted parent whose only reply is deleted disappears entirely."""
        # Arrange
        root = make_comment(article_id, status=CommentStatus.DELETED)
        reply = make_comment(
            article_id, parent=root, status=CommentStatus.DELETED, minutes=1
        )

        # Act
        roots = builder.build([root, reply])

        # Assert
        assert roots == []

    def test_pending_comments_are_shown(self, builder, article_id):
        # Arrange
        root = make_comment(article_id, content="awaiting", status=CommentStatus.PENDING)

        # Act
        roots = builder.build([root])

        # Assert
        assert roots[0].content == "awaiting"


class TestSorting:
    """Tests for sibling ordering."""

    def test_newest_first_by_default(self, builder, article_id):
        # Arrange
        old = make_comment(article_id, minutes=0)
        new = make_comment(article_id, minutes=10)

        # Act
        roots = builder.build([old, new])

        # Assert
        assert [n.comment.id for n in roots] == [new.id, old.id]

    def test_oldest_first(self, builder, article_id):
        # Arrange
        old = make_comment(article_id, minutes=0)
        new = make_comment(article_id, minutes=10)

        # Act
        roots = builder.build([new, old], sort=CommentSort.OLDEST)

        # Assert
        assert [n.comment.id for n in roots] == [old.id, new.id]

    def test_top_orders_by_score_then_recency(self, builder, article_id):
        # Arrange
        old_popular = upvoted(make_comment(article_id, minutes=0), 3)
        old_tied = upvoted(make_comment(article_id, minutes=1), 1)
        new_tied = upvoted(make_comment(article_id, minutes=2), 1)

        # Act
        roots = builder.build([old_tied, new_tied, old_popular], sort=CommentSort.TOP)

        # Assert
        assert [n.comment.id for n in roots] == [old_popular.id, new_tied.id, old_tied.id]
        assert [n.score for n in roots] == [3, 1, 1]

    def test_sort_applies_at_every_level(self, builder, article_id):
        # Arrange
        root = make_comment(article_id)
        first = make_comment(article_id, parent=root, minutes=1)
        second = make_comment(article_id, parent=root, minutes=2)

        # Act
        roots = builder.build([root, first, second], sort=CommentSort.OLDEST)

        # Assert
        assert [n.comment.id for n in roots[0].children] == [first.id, second.id]
