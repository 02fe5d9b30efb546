"""Get comments use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import CommentNode, to_comment_node
from chemwiki.domain.service import CommentService, JWTService
from chemwiki.domain.value import CommentSort


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    article_ref: str  # Article UUID or slug
    sort: CommentSort = CommentSort.NEWEST
    auth_token: str | None = None  # JWT token for the viewer's votes (optional)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    article_id: str
    article_slug: str
    comments: list[CommentNode]
    total: int  # Visible comments, including those beyond the display depth
    sort: CommentSort


class GetCommentsUseCase:
    """Use case for reading an article's discussion as a reply tree."""

    def __init__(
        self,
        comment_service: CommentService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            jwt_service: JWT service for decoding the optional viewer token
        """
        self.comment_service = comment_service
        self.jwt_service = jwt_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Anonymous viewers (and viewers with an invalid token) get the same
        tree without their own vote directions.

        Args:
            request: Get comments request

        Returns:
            Nested comments with scores and the viewer's votes

        Raises:
            NotFoundError: If the article does not exist
        """
        viewer = self.jwt_service.get_principal_from_token(request.auth_token)

        thread = await self.comment_service.list_for_article(
            article_ref=request.article_ref,
            viewer_id=viewer.user_id if viewer else None,
            sort=request.sort,
        )

        return GetCommentsResponse(
            article_id=str(thread.article.id),
            article_slug=thread.article.slug.root,
            comments=[to_comment_node(node, thread.authors) for node in thread.roots],
            total=thread.total,
            sort=request.sort,
        )
