"""Remove vote use case."""

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.application.usecase.vote.vote_comment import VoteResponse
from chemwiki.domain.service import CommentService


class RemoveVoteRequest(ActorRequest):
    """Remove vote request."""

    comment_id: str  # UUID string


class RemoveVoteUseCase:
    """Use case for withdrawing a vote, whatever its direction."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize remove vote use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: RemoveVoteRequest) -> VoteResponse:
        """Execute remove vote flow.

        Removing a vote that does not exist succeeds without changes.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment_id = parse_comment_id(request.comment_id)
        tally = await self.comment_service.unvote(comment_id, request.principal)
        return VoteResponse.from_tally(str(comment_id), tally)
