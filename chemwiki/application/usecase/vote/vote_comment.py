"""Vote on comment use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.domain.service import CommentService
from chemwiki.domain.value import VoteDirection, VoteTally


class VoteCommentRequest(ActorRequest):
    """Vote request."""

    comment_id: str  # UUID string
    direction: VoteDirection


class VoteResponse(BaseModel):
    """Score of a comment after a vote change."""

    comment_id: str
    score: int
    upvotes: int
    downvotes: int
    user_vote: VoteDirection | None  # None once the vote is toggled off

    @classmethod
    def from_tally(cls, comment_id: str, tally: VoteTally) -> "VoteResponse":
        return cls(
            comment_id=comment_id,
            score=tally.score,
            upvotes=tally.upvotes,
            downvotes=tally.downvotes,
            user_vote=tally.voter_direction,
        )


class VoteCommentUseCase:
    """Use case for up- or downvoting a comment.

    Voting the same direction twice cancels the vote; voting the opposite
    direction switches it.
    """

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize vote use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: VoteCommentRequest) -> VoteResponse:
        """Execute vote flow.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is deleted
        """
        comment_id = parse_comment_id(request.comment_id)
        tally = await self.comment_service.vote(
            comment_id, request.principal, request.direction
        )
        return VoteResponse.from_tally(str(comment_id), tally)
