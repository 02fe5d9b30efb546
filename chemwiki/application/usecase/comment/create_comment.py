"""Create comment use case."""

from chemwiki.application.usecase.common import ActorRequest, CommentItem, to_comment_item
from chemwiki.domain.service import CommentService


class CreateCommentRequest(ActorRequest):
    """Create comment request."""

    article_ref: str  # Article UUID or slug
    content: str | None = None  # Checked and trimmed by the domain


class CreateCommentUseCase:
    """Use case for starting a new discussion on an article."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        The comment service validates and escapes the content, stores the
        comment as approved and refreshes the article's comment count.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the article does not exist
            ValidationError: If the content is blank or too long
        """
        comment = await self.comment_service.create(
            article_ref=request.article_ref,
            principal=request.principal,
            content=request.content,
        )
        authors = await self.comment_service.get_authors([comment])
        return to_comment_item(comment, authors)
