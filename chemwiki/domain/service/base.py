"""Base classes for domain services."""

from typing import Callable

import logfire

from chemwiki.domain.error import NotFoundError, StaleRecordError
from chemwiki.domain.model.comment import Comment
from chemwiki.domain.repository import CommentRepository


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


class CommentWriter(Service):
    """Base for services that modify existing comments.

    Every modification is a pure function ``Comment -> Comment`` applied to
    the latest stored record and written back with the repository's
    version-checked ``save``. A lost race reloads the record and applies the
    function again, so concurrent writers to one comment never overwrite
    each other.
    """

    def __init__(self, comment_repository: CommentRepository, retry_limit: int) -> None:
        """Initialize comment writer.

        Args:
            comment_repository: Comment repository
            retry_limit: Attempts before a conflict is given up on
        """
        self.comment_repository = comment_repository
        self.retry_limit = retry_limit

    async def _apply(
        self, comment: Comment, change: Callable[[Comment], Comment]
    ) -> Comment:
        """Apply ``change`` to ``comment`` atomically.

        ``change`` may raise a domain error after looking at the fresh record;
        returning its argument unchanged means there is nothing to write.

        Args:
            comment: The comment as last read by the caller
            change: Pure function producing the new record

        Returns:
            The stored comment

        Raises:
            NotFoundError: If the comment disappeared between attempts
            StaleRecordError: If every attempt lost a race
        """
        current = comment
        for attempt in range(1, self.retry_limit + 1):
            updated = change(current)
            if updated is current:
                return current

            try:
                return await self.comment_repository.save(updated)
            except StaleRecordError:
                logfire.warn(
                    "Comment write conflict",
                    comment_id=str(comment.id),
                    attempt=attempt,
                    version=current.version,
                )
                if attempt == self.retry_limit:
                    raise

            reloaded = await self.comment_repository.find_by_id(comment.id)
            if reloaded is None:
                raise NotFoundError("Comment", str(comment.id))
            current = reloaded

        # Unreachable: the final failed attempt re-raises above
        raise StaleRecordError("Comment", str(comment.id), current.version)
