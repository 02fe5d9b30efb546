"""Vote ledger domain service."""

from datetime import datetime

import logfire

from chemwiki.domain.model.comment import Comment
from chemwiki.domain.repository import CommentRepository
from chemwiki.domain.value import UserId, VoteDirection, VoteTally

from .base import CommentWriter


def tally_for(comment: Comment, voter_id: UserId | None = None) -> VoteTally:
    """Summarise a comment's votes from one voter's point of view.

    Args:
        comment: Comment to summarise
        voter_id: Voter whose direction to report (None for anonymous)

    Returns:
        Score, vote counts and the voter's current direction
    """
    return VoteTally(
        score=comment.score,
        upvotes=len(comment.upvoters),
        downvotes=len(comment.downvoters),
        voter_direction=comment.vote_of(voter_id),
    )


def apply_toggle(
    comment: Comment, voter_id: UserId, direction: VoteDirection
) -> Comment:
    """Toggle a vote on a comment record.

    The voter is first removed from whichever set holds them. Voting the same
    direction twice therefore cancels the vote; voting the other direction
    moves the voter across.

    Args:
        comment: Current comment record
        voter_id: Voting user
        direction: Requested direction

    Returns:
        New comment record (the input is never modified)
    """
    previous = comment.vote_of(voter_id)
    upvoters = comment.upvoters - {voter_id}
    downvoters = comment.downvoters - {voter_id}

    if previous != direction:
        if direction == VoteDirection.UP:
            upvoters = upvoters | {voter_id}
        else:
            downvoters = downvoters | {voter_id}

    return comment.model_copy(
        update={
            "upvoters": upvoters,
            "downvoters": downvoters,
            "updated_at": datetime.now(),
        }
    )


def apply_removal(comment: Comment, voter_id: UserId) -> Comment:
    """Drop a voter from both vote sets.

    Returns the input unchanged when the voter has no vote.
    """
    if comment.vote_of(voter_id) is None:
        return comment
    return comment.model_copy(
        update={
            "upvoters": comment.upvoters - {voter_id},
            "downvoters": comment.downvoters - {voter_id},
            "updated_at": datetime.now(),
        }
    )


class VoteLedger(CommentWriter):
    """Domain service for comment votes.

    Upvoters and downvoters are stored on the comment itself as sets, so a
    vote is a conditional update of a single record.
    """

    def __init__(self, comment_repository: CommentRepository, retry_limit: int = 5) -> None:
        """Initialize vote ledger.

        Args:
            comment_repository: Comment repository
            retry_limit: Attempts before a write conflict is given up on
        """
        super().__init__(comment_repository, retry_limit)

    async def toggle(
        self, comment: Comment, voter_id: UserId, direction: VoteDirection
    ) -> VoteTally:
        """Toggle a user's vote on a comment.

        Args:
            comment: Comment to vote on
            voter_id: Voting user
            direction: Requested direction

        Returns:
            Updated score and the voter's resulting direction (None after a
            toggle-off)
        """
        with logfire.span(
            "vote_ledger.toggle",
            comment_id=str(comment.id),
            voter_id=str(voter_id),
            direction=direction.value,
        ):
            saved = await self._apply(
                comment, lambda current: apply_toggle(current, voter_id, direction)
            )
            tally = tally_for(saved, voter_id)
            logfire.info(
                "Comment vote toggled",
                comment_id=str(comment.id),
                voter_id=str(voter_id),
                direction=direction.value,
                voter_direction=(
                    tally.voter_direction.value if tally.voter_direction else None
                ),
                score=tally.score,
            )
            return tally

    async def remove_vote(self, comment: Comment, voter_id: UserId) -> VoteTally:
        """Remove a user's vote from a comment, whatever its direction.

        Args:
            comment: Comment to update
            voter_id: Voting user

        Returns:
            Updated score with no voter direction
        """
        with logfire.span(
            "vote_ledger.remove_vote",
            comment_id=str(comment.id),
            voter_id=str(voter_id),
        ):
            saved = await self._apply(
                comment, lambda current: apply_removal(current, voter_id)
            )
            tally = tally_for(saved, voter_id)
            logfire.info(
                "Comment vote removed",
                comment_id=str(comment.id),
                voter_id=str(voter_id),
                score=tally.score,
            )
            return tally
