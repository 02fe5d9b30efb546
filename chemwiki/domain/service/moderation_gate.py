"""Moderation gate domain service."""

from datetime import datetime

import logfire

from chemwiki.config import CommentSettings
from chemwiki.domain.error import AlreadyReportedError, InvalidStateError
from chemwiki.domain.model.comment import Comment, CommentReport
from chemwiki.domain.repository import CommentRepository
from chemwiki.domain.value import CommentId, CommentStatus, UserId

from .base import CommentWriter
from .text import clean_text


def transition(
    comment: Comment, target: CommentStatus, content: str | None = None
) -> Comment:
    """Move a comment to ``target`` status.

    Moving to the current status is a no-op and returns the input itself.

    Args:
        comment: Current comment record
        target: Requested status
        content: Replacement content, if the transition rewrites it

    Returns:
        New comment record

    Raises:
        InvalidStateError: If the status table forbids the move
    """
    if not comment.status.can_transition_to(target):
        raise InvalidStateError(
            f"Cannot move comment {comment.id} from {comment.status.value} "
            f"to {target.value}"
        )
    if comment.status == target and (content is None or content == comment.content):
        return comment

    update: dict[str, object] = {"status": target, "updated_at": datetime.now()}
    if content is not None:
        update["content"] = content
    return comment.model_copy(update=update)


class ModerationGate(CommentWriter):
    """Domain service for reports and status transitions.

    Comments are auto-approved on creation. They become spam when an admin
    rejects them or when enough distinct users report them, and deleted when
    their author (or an admin) removes them. Only a purge physically removes
    records.
    """

    def __init__(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> None:
        """Initialize moderation gate.

        Args:
            comment_repository: Comment repository
            settings: Thread configuration (thresholds, placeholders)
        """
        super().__init__(comment_repository, settings.write_retry_limit)
        self.settings = settings

    async def report(self, comment: Comment, reporter_id: UserId, reason: str | None) -> Comment:
        """Record a user's report and escalate to spam at the threshold.

        Args:
            comment: Reported comment
            reporter_id: Reporting user
            reason: Free-text reason (1-500 characters after trimming)

        Returns:
            Updated comment

        Raises:
            ValidationError: If the reason is blank or too long
            AlreadyReportedError: If this user has reported the comment before
            InvalidStateError: If the comment is deleted
        """
        with logfire.span(
            "moderation_gate.report",
            comment_id=str(comment.id),
            reporter_id=str(reporter_id),
        ):
            cleaned = clean_text(
                reason,
                field="Report reason",
                max_length=self.settings.max_reason_length,
            )

            def add_report(current: Comment) -> Comment:
                if current.status == CommentStatus.DELETED:
                    raise InvalidStateError("Cannot report a deleted comment")
                if current.has_reported(reporter_id):
                    raise AlreadyReportedError(str(current.id), str(reporter_id))

                reports = current.reports + (
                    CommentReport(
                        reporter_id=reporter_id,
                        reason=cleaned,
                        reported_at=datetime.now(),
                    ),
                )
                status = current.status
                if (
                    len(reports) >= self.settings.spam_report_threshold
                    and status in (CommentStatus.APPROVED, CommentStatus.PENDING)
                ):
                    status = CommentStatus.SPAM

                return current.model_copy(
                    update={
                        "reports": reports,
                        "status": status,
                        "updated_at": datetime.now(),
                    }
                )

            try:
                saved = await self._apply(comment, add_report)
            except AlreadyReportedError:
                logfire.warn(
                    "Duplicate report attempt",
                    comment_id=str(comment.id),
                    reporter_id=str(reporter_id),
                )
                raise

            logfire.info(
                "Comment reported",
                comment_id=str(saved.id),
                reporter_id=str(reporter_id),
                report_count=len(saved.reports),
                status=saved.status.value,
            )
            if saved.status != comment.status:
                logfire.warn(
                    "Comment escalated by reports",
                    comment_id=str(saved.id),
                    report_count=len(saved.reports),
                    status=saved.status.value,
                )
            return saved

    async def approve(self, comment: Comment) -> Comment:
        """Mark a comment as approved. Reports are kept.

        Raises:
            InvalidStateError: If the comment is deleted
        """
        return await self._moderate(comment, CommentStatus.APPROVED)

    async def reject(self, comment: Comment) -> Comment:
        """Mark a comment as spam.

        Raises:
            InvalidStateError: If the comment is deleted
        """
        return await self._moderate(comment, CommentStatus.SPAM)

    async def _moderate(self, comment: Comment, target: CommentStatus) -> Comment:
        with logfire.span(
            "moderation_gate.moderate",
            comment_id=str(comment.id),
            target=target.value,
        ):
            saved = await self._apply(
                comment, lambda current: transition(current, target)
            )
            logfire.info(
                "Comment moderated",
                comment_id=str(saved.id),
                previous_status=comment.status.value,
                status=saved.status.value,
            )
            return saved

    async def soft_delete(self, comment: Comment) -> Comment:
        """Mark a comment as deleted and blank out its content.

        The record stays so that replies keep their parent.
        """
        with logfire.span("moderation_gate.soft_delete", comment_id=str(comment.id)):
            saved = await self._apply(
                comment,
                lambda current: transition(
                    current,
                    CommentStatus.DELETED,
                    content=self.settings.deleted_placeholder,
                ),
            )
            logfire.info("Comment soft-deleted", comment_id=str(saved.id))
            return saved

    async def purge(self, comment: Comment) -> int:
        """Permanently remove a comment and all of its replies.

        The subtree is collected with an explicit stack and removed children
        first, so no stored reply ever points at a missing parent. Running it
        again over a partially purged subtree finishes the job.

        Args:
            comment: Root of the subtree to remove

        Returns:
            Number of records removed
        """
        with logfire.span("moderation_gate.purge", comment_id=str(comment.id)):
            ordered: list[CommentId] = []
            seen: set[CommentId] = set()
            stack: list[CommentId] = [comment.id]

            while stack:
                current_id = stack.pop()
                if current_id in seen:
                    continue
                seen.add(current_id)
                ordered.append(current_id)
                for child in await self.comment_repository.find_children(current_id):
                    stack.append(child.id)

            # Pre-order reversed: every reply comes before its parent
            removed = 0
            for comment_id in reversed(ordered):
                if await self.comment_repository.delete(comment_id):
                    removed += 1

            logfire.info(
                "Comment subtree purged",
                comment_id=str(comment.id),
                removed=removed,
                descendants=len(ordered) - 1,
            )
            return removed
