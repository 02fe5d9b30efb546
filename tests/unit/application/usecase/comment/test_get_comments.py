"""Unit tests for GetCommentsUseCase."""

from uuid import uuid4

import pytest

from chemwiki.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
    ReplyToCommentRequest,
    ReplyToCommentUseCase,
)
from chemwiki.application.usecase.vote import VoteCommentRequest, VoteCommentUseCase
from chemwiki.domain.repository import ArticleRepository, UserRepository
from chemwiki.domain.service import JWTService
from chemwiki.domain.value import CommentSort, UserId, VoteDirection
from tests.conftest import make_article, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCommentsUseCase:
    """Tests for GetCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_nested_response_with_author_names(self, unit_env):
        """Replies are nested, known authors named, unknown ones shown as [deleted]."""
        # Arrange
        article = await (await unit_env.get(ArticleRepository)).save(make_article())
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.save(make_user(UserId(uuid4()), "alice"))
        departed = UserId(uuid4())

        create = await unit_env.get(CreateCommentUseCase)
        reply = await unit_env.get(ReplyToCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)

        root = await create.execute(
            CreateCommentRequest(
                article_ref="sodium", content="Is 150 high?", user_id=str(alice.id)
            )
        )
        await reply.execute(
            ReplyToCommentRequest(
                parent_id=root.comment_id, content="Yes", user_id=str(departed)
            )
        )

        # Act
        response = await get_comments.execute(GetCommentsRequest(article_ref="sodium"))

        # Assert
        assert response.article_id == str(article.id)
        assert response.article_slug == "sodium"
        assert response.total == 2
        assert response.sort == CommentSort.NEWEST
        [node] = response.comments
        assert node.author_name == "alice"
        assert node.depth == 0
        assert node.reply_count == 1
        assert node.replies[0].author_name == "[deleted]"
        assert node.replies[0].depth == 1
        assert node.replies[0].parent_id == root.comment_id

    @pytest.mark.asyncio
    async def test_viewer_votes_come_from_token(self, unit_env):
        # Arrange
        await (await unit_env.get(ArticleRepository)).save(make_article())
        jwt_service = await unit_env.get(JWTService)
        create = await unit_env.get(CreateCommentUseCase)
        vote = await unit_env.get(VoteCommentUseCase)
        get_comments = await unit_env.get(GetCommentsUseCase)

        voter_id = str(uuid4())
        comment = await create.execute(
            CreateCommentRequest(
                article_ref="sodium", content="Helpful", user_id=str(uuid4())
            )
        )
        await vote.execute(
            VoteCommentRequest(
                comment_id=comment.comment_id,
                direction=VoteDirection.UP,
                user_id=voter_id,
            )
        )

        # Act
        as_voter = await get_comments.execute(
            GetCommentsRequest(
                article_ref="sodium", auth_token=jwt_service.create_token(voter_id)
            )
        )
        anonymous = await get_comments.execute(GetCommentsRequest(article_ref="sodium"))
        bad_token = await get_comments.execute(
            GetCommentsRequest(article_ref="sodium", auth_token="garbage")
        )

        # Assert
        assert as_voter.comments[0].user_vote == VoteDirection.UP
        assert as_voter.comments[0].score == 1
        assert anonymous.comments[0].user_vote is None
        assert bad_token.comments[0].user_vote is None
        assert anonymous.comments[0].score == 1
