"""Unit tests for VoteLedger."""

from uuid import uuid4

import pytest

from chemwiki.domain.error import StaleRecordError
from chemwiki.domain.model.comment import Comment
from chemwiki.domain.repository import CommentRepository
from chemwiki.domain.service import VoteLedger
from chemwiki.domain.service.vote_ledger import apply_removal, apply_toggle, tally_for
from chemwiki.domain.value import ArticleId, UserId, VoteDirection
from chemwiki.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class AlwaysStaleCommentRepository(InMemoryCommentRepository):
    """Repository where every conditional write loses the race."""

    def __init__(self) -> None:
        super().__init__()
        self.save_attempts = 0

    async def save(self, comment: Comment) -> Comment:
        self.save_attempts += 1
        raise StaleRecordError("Comment", str(comment.id), comment.version)


class TestApplyToggle:
    """Tests for the pure toggle and removal helpers."""

    def test_vote_on_fresh_comment_adds_voter(self):
        """First vote puts the voter in the requested set."""
        # Arrange
        comment = make_comment(ArticleId(uuid4()))
        voter = UserId(uuid4())

        # Act
        result = apply_toggle(comment, voter, VoteDirection.UP)

        # Assert
        assert voter in result.upvoters
        assert voter not in result.downvoters
        assert result.score == 1
        assert comment.score == 0  # Input untouched

    def test_same_direction_twice_is_an_involution(self):
        """Voting the same way twice returns to no vote and the original score."""
        # Arrange
        comment = make_comment(ArticleId(uuid4()))
        voter = UserId(uuid4())

        # Act
        once = apply_toggle(comment, voter, VoteDirection.DOWN)
        twice = apply_toggle(once, voter, VoteDirection.DOWN)

        # Assert
        assert once.score == -1
        assert twice.score == comment.score
        assert twice.vote_of(voter) is None

    def test_switching_direction_moves_voter_and_changes_score_by_two(self):
        """Down then up moves the voter across; score changes by exactly 2."""
        # Arrange
        comment = make_comment(ArticleId(uuid4()))
        voter = UserId(uuid4())
        downvoted = apply_toggle(comment, voter, VoteDirection.DOWN)

        # Act
        upvoted = apply_toggle(downvoted, voter, VoteDirection.UP)

        # Assert
        assert upvoted.score - downvoted.score == 2
        assert voter in upvoted.upvoters
        assert voter not in upvoted.downvoters

    def test_removal_without_vote_returns_same_record(self):
        """Removing a vote that does not exist is a no-op."""
        # Arrange
        comment = make_comment(ArticleId(uuid4()))

        # Act
        result = apply_removal(comment, UserId(uuid4()))

        # Assert
        assert result is comment

    def test_tally_reports_voter_direction(self):
        """The tally carries the viewer's own vote, anonymous viewers get None."""
        # Arrange
        voter = UserId(uuid4())
        comment = apply_toggle(
            make_comment(ArticleId(uuid4())), voter, VoteDirection.UP
        )

        # Act
        mine = tally_for(comment, voter)
        anonymous = tally_for(comment)

        # Assert
        assert mine.voter_direction == VoteDirection.UP
        assert anonymous.voter_direction is None
        assert mine.score == anonymous.score == 1
        assert (mine.upvotes, mine.downvotes) == (1, 0)


class TestToggle:
    """Tests for VoteLedger.toggle."""

    @pytest.mark.asyncio
    async def test_toggle_persists_vote_and_bumps_version(self, unit_env):
        """A vote is stored with a new version."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.create(make_comment(ArticleId(uuid4())))
        voter = UserId(uuid4())

        # Act
        tally = await ledger.toggle(comment, voter, VoteDirection.UP)

        # Assert
        assert tally.score == 1
        assert tally.voter_direction == VoteDirection.UP
        stored = await comment_repo.find_by_id(comment.id)
        assert voter in stored.upvoters
        assert stored.version == comment.version + 1

    @pytest.mark.asyncio
    async def test_toggle_twice_returns_to_neutral(self, unit_env):
        """Second identical vote cancels the first."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.create(make_comment(ArticleId(uuid4())))
        voter = UserId(uuid4())
        await ledger.toggle(comment, voter, VoteDirection.UP)
        current = await comment_repo.find_by_id(comment.id)

        # Act
        tally = await ledger.toggle(current, voter, VoteDirection.UP)

        # Assert
        assert tally.score == 0
        assert tally.voter_direction is None

    @pytest.mark.asyncio
    async def test_stale_snapshot_does_not_lose_concurrent_vote(self, unit_env):
        """A writer holding an old version reloads and keeps the other vote."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        snapshot = await comment_repo.create(make_comment(ArticleId(uuid4())))
        first, second = UserId(uuid4()), UserId(uuid4())

        # Both callers read the same version; the first one wins the race
        await ledger.toggle(snapshot, first, VoteDirection.UP)

        # Act
        tally = await ledger.toggle(snapshot, second, VoteDirection.UP)

        # Assert
        assert tally.score == 2
        stored = await comment_repo.find_by_id(snapshot.id)
        assert stored.upvoters == frozenset({first, second})
        assert stored.version == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_retry_limit(self):
        """Persistent conflicts surface as StaleRecordError after the retry limit."""
        # Arrange
        repo = AlwaysStaleCommentRepository()
        comment = await repo.create(make_comment(ArticleId(uuid4())))
        ledger = VoteLedger(repo, retry_limit=3)

        # Act & Assert
        with pytest.raises(StaleRecordError):
            await ledger.toggle(comment, UserId(uuid4()), VoteDirection.UP)
        assert repo.save_attempts == 3


class TestRemoveVote:
    """Tests for VoteLedger.remove_vote."""

    @pytest.mark.asyncio
    async def test_remove_existing_downvote(self, unit_env):
        """Removing a downvote restores the score."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.create(make_comment(ArticleId(uuid4())))
        voter = UserId(uuid4())
        await ledger.toggle(comment, voter, VoteDirection.DOWN)
        current = await comment_repo.find_by_id(comment.id)

        # Act
        tally = await ledger.remove_vote(current, voter)

        # Assert
        assert tally.score == 0
        assert tally.voter_direction is None

    @pytest.mark.asyncio
    async def test_remove_missing_vote_does_not_write(self, unit_env):
        """No vote means no write, so the version stays put."""
        # Arrange
        ledger = await unit_env.get(VoteLedger)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.create(make_comment(ArticleId(uuid4())))

        # Act
        tally = await ledger.remove_vote(comment, UserId(uuid4()))

        # Assert
        assert tally.score == 0
        stored = await comment_repo.find_by_id(comment.id)
        assert stored.version == comment.version
