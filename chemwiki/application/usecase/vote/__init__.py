"""Vote use cases."""

from .remove_vote import RemoveVoteRequest, RemoveVoteUseCase
from .vote_comment import VoteCommentRequest, VoteCommentUseCase, VoteResponse

__all__ = [
    "RemoveVoteRequest",
    "RemoveVoteUseCase",
    "VoteCommentRequest",
    "VoteCommentUseCase",
    "VoteResponse",
]
