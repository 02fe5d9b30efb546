"""Comment domain service.

Orchestrates the discussion subsystem: validation, authorization, reply
depth, sanitization and the article comment-count refresh. State changes are
delegated to the vote ledger and the moderation gate.
"""

from dataclasses import dataclass, field
from datetime import datetime
from math import ceil
from uuid import UUID, uuid4

import logfire

from chemwiki.config import CommentSettings
from chemwiki.domain.error import (
    DepthLimitExceededError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from chemwiki.domain.model import Article, Comment, User
from chemwiki.domain.repository import (
    ArticleRepository,
    CommentRepository,
    UserRepository,
)
from chemwiki.domain.value import (
    VISIBLE_STATUSES,
    ArticleId,
    CommentId,
    CommentSort,
    CommentStatus,
    ModerationAction,
    Principal,
    Slug,
    UserId,
    VoteDirection,
    VoteTally,
)

from .base import CommentWriter
from .moderation_gate import ModerationGate
from .text import clean_text
from .thread_builder import CommentTreeNode, ThreadBuilder
from .vote_ledger import VoteLedger, tally_for


@dataclass
class CommentThread:
    """An article's discussion, nested and enriched for one viewer."""

    article: Article
    roots: list[CommentTreeNode]
    total: int  # Visible (approved or pending) comments
    authors: dict[UserId, User] = field(default_factory=dict)


@dataclass
class CommentPage:
    """One page of the admin comment listing."""

    items: list[Comment]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return ceil(self.total / self.limit) if self.limit else 0


@dataclass
class PurgeResult:
    """Outcome of a permanent delete."""

    comment_id: CommentId
    article_id: ArticleId
    removed: int

    @property
    def descendants_removed(self) -> int:
        return max(self.removed - 1, 0)


class CommentService(CommentWriter):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        article_repository: ArticleRepository,
        user_repository: UserRepository,
        vote_ledger: VoteLedger,
        moderation_gate: ModerationGate,
        thread_builder: ThreadBuilder,
        settings: CommentSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            article_repository: Article host port
            user_repository: User directory port
            vote_ledger: Vote ledger service
            moderation_gate: Moderation gate service
            thread_builder: Thread builder
            settings: Thread configuration
        """
        super().__init__(comment_repository, settings.write_retry_limit)
        self.article_repository = article_repository
        self.user_repository = user_repository
        self.vote_ledger = vote_ledger
        self.moderation_gate = moderation_gate
        self.thread_builder = thread_builder
        self.settings = settings

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_article(self, article_ref: str) -> Article:
        """Resolve an article by UUID or slug.

        Args:
            article_ref: Article UUID string or slug

        Returns:
            The article

        Raises:
            NotFoundError: If no article matches
        """
        with logfire.span("comment_service.get_article", article_ref=article_ref):
            article = None
            try:
                article_id = ArticleId(UUID(article_ref))
            except ValueError:
                try:
                    slug = Slug(article_ref)
                except ValueError:
                    slug = None
                if slug is not None:
                    article = await self.article_repository.find_by_slug(slug)
            else:
                article = await self.article_repository.find_by_id(article_id)

            if article is None:
                logfire.warn("Article not found", article_ref=article_ref)
                raise NotFoundError("Article", article_ref)
            return article

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_authors(self, comments: list[Comment]) -> dict[UserId, User]:
        """Look up the directory records of the comments' authors.

        Authors unknown to the directory are absent from the result.
        """
        return await self.user_repository.find_by_ids(
            {comment.author_id for comment in comments}
        )

    async def depth_of(self, comment: Comment) -> int:
        """Count the hops from a comment up to its root.

        Stops early once the depth limit is reached, at a missing ancestor,
        or at a cycle.

        Args:
            comment: Comment to measure

        Returns:
            Depth, with roots at 0
        """
        depth = 0
        seen = {comment.id}
        current = comment
        while current.parent_id is not None and depth < self.settings.max_depth:
            if current.parent_id in seen:
                logfire.error(
                    "Cycle in comment ancestry", comment_id=str(comment.id)
                )
                break
            parent = await self.comment_repository.find_by_id(current.parent_id)
            if parent is None:
                break
            seen.add(parent.id)
            depth += 1
            current = parent
        return depth

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    async def create(
        self, article_ref: str, principal: Principal, content: str | None
    ) -> Comment:
        """Create a root comment on an article.

        Args:
            article_ref: Article UUID string or slug
            principal: Authenticated author
            content: Raw comment text

        Returns:
            The created comment

        Raises:
            NotFoundError: If the article does not exist
            ValidationError: If the content is blank or too long
        """
        with logfire.span(
            "comment_service.create",
            article_ref=article_ref,
            author_id=str(principal.user_id),
        ):
            article = await self.get_article(article_ref)
            return await self._insert(article.id, principal.user_id, content, None)

    async def reply(
        self, parent_id: CommentId, principal: Principal, content: str | None
    ) -> Comment:
        """Reply to an existing comment.

        Args:
            parent_id: Comment being replied to
            principal: Authenticated author
            content: Raw reply text

        Returns:
            The created reply

        Raises:
            NotFoundError: If the parent or its article does not exist
            InvalidStateError: If the parent is deleted
            DepthLimitExceededError: If the reply would reach the depth limit
            ValidationError: If the content is blank or too long
        """
        with logfire.span(
            "comment_service.reply",
            parent_id=str(parent_id),
            author_id=str(principal.user_id),
        ):
            parent = await self.get_comment(parent_id)
            if parent.status == CommentStatus.DELETED:
                raise InvalidStateError("Cannot reply to a deleted comment")

            parent_depth = await self.depth_of(parent)
            if parent_depth + 1 >= self.settings.max_depth:
                logfire.warn(
                    "Reply depth limit reached",
                    parent_id=str(parent_id),
                    parent_depth=parent_depth,
                )
                raise DepthLimitExceededError(self.settings.max_depth)

            article = await self.article_repository.find_by_id(parent.article_id)
            if article is None:
                raise NotFoundError("Article", str(parent.article_id))

            return await self._insert(
                article.id, principal.user_id, content, parent.id
            )

    async def _insert(
        self,
        article_id: ArticleId,
        author_id: UserId,
        content: str | None,
        parent_id: CommentId | None,
    ) -> Comment:
        cleaned = clean_text(
            content, field="Comment", max_length=self.settings.max_content_length
        )
        now = datetime.now()
        comment = Comment(
            id=CommentId(uuid4()),
            article_id=article_id,
            author_id=author_id,
            parent_id=parent_id,
            content=cleaned,
            status=CommentStatus.APPROVED,
            created_at=now,
            updated_at=now,
        )

        saved = await self.comment_repository.create(comment)
        logfire.info(
            "Comment created",
            comment_id=str(saved.id),
            article_id=str(article_id),
            parent_id=str(parent_id) if parent_id else None,
        )
        await self.refresh_comment_count(article_id)
        return saved

    async def edit(
        self, comment_id: CommentId, principal: Principal, content: str | None
    ) -> Comment:
        """Replace the content of one's own comment.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is not the author
            InvalidStateError: If the comment is deleted
            ValidationError: If the content is blank or too long
        """
        with logfire.span(
            "comment_service.edit",
            comment_id=str(comment_id),
            user_id=str(principal.user_id),
        ):
            comment = await self.get_comment(comment_id)
            if comment.author_id != principal.user_id:
                logfire.warn(
                    "Unauthorized comment edit attempt",
                    comment_id=str(comment_id),
                    user_id=str(principal.user_id),
                )
                raise ForbiddenError(
                    "edit", "comment", str(comment_id), str(principal.user_id)
                )

            cleaned = clean_text(
                content, field="Comment", max_length=self.settings.max_content_length
            )

            def rewrite(current: Comment) -> Comment:
                if current.status == CommentStatus.DELETED:
                    raise InvalidStateError("Cannot edit a deleted comment")
                now = datetime.now()
                return current.model_copy(
                    update={
                        "content": cleaned,
                        "is_edited": True,
                        "edited_at": now,
                        "updated_at": now,
                    }
                )

            saved = await self._apply(comment, rewrite)
            logfire.info(
                "Comment edited",
                comment_id=str(comment_id),
                content_length=len(saved.content),
            )
            return saved

    async def soft_delete(self, comment_id: CommentId, principal: Principal) -> Comment:
        """Delete a comment while keeping its place in the thread.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is neither the author nor an admin
        """
        with logfire.span(
            "comment_service.soft_delete",
            comment_id=str(comment_id),
            user_id=str(principal.user_id),
        ):
            comment = await self.get_comment(comment_id)
            if comment.author_id != principal.user_id and not principal.is_admin:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    user_id=str(principal.user_id),
                )
                raise ForbiddenError(
                    "delete", "comment", str(comment_id), str(principal.user_id)
                )

            saved = await self.moderation_gate.soft_delete(comment)
            await self.refresh_comment_count(saved.article_id)
            return saved

    async def vote(
        self, comment_id: CommentId, principal: Principal, direction: VoteDirection
    ) -> VoteTally:
        """Toggle the caller's vote in ``direction``.

        Raises:
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is deleted
        """
        comment = await self.get_comment(comment_id)
        if comment.status == CommentStatus.DELETED:
            raise InvalidStateError("Cannot vote on a deleted comment")
        return await self.vote_ledger.toggle(comment, principal.user_id, direction)

    async def unvote(self, comment_id: CommentId, principal: Principal) -> VoteTally:
        """Remove the caller's vote, if any.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.get_comment(comment_id)
        return await self.vote_ledger.remove_vote(comment, principal.user_id)

    async def report(
        self, comment_id: CommentId, principal: Principal, reason: str | None
    ) -> Comment:
        """Report a comment. Reaching the threshold marks it as spam.

        Raises:
            NotFoundError: If the comment does not exist
            AlreadyReportedError: If the caller reported it before
            ValidationError: If the reason is blank or too long
            InvalidStateError: If the comment is deleted
        """
        comment = await self.get_comment(comment_id)
        saved = await self.moderation_gate.report(comment, principal.user_id, reason)
        if saved.status != comment.status:
            await self.refresh_comment_count(saved.article_id)
        return saved

    async def moderate(
        self, comment_id: CommentId, principal: Principal, action: ModerationAction
    ) -> Comment:
        """Approve or reject a comment (admin only).

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is deleted
        """
        self._require_admin(principal, action.value, comment_id)
        comment = await self.get_comment(comment_id)
        if action == ModerationAction.APPROVE:
            saved = await self.moderation_gate.approve(comment)
        else:
            saved = await self.moderation_gate.reject(comment)
        await self.refresh_comment_count(saved.article_id)
        return saved

    async def purge(self, comment_id: CommentId, principal: Principal) -> PurgeResult:
        """Permanently delete a comment and its replies (admin only).

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the comment does not exist
        """
        self._require_admin(principal, "purge", comment_id)
        comment = await self.get_comment(comment_id)
        removed = await self.moderation_gate.purge(comment)
        await self.refresh_comment_count(comment.article_id)
        return PurgeResult(
            comment_id=comment.id, article_id=comment.article_id, removed=removed
        )

    def _require_admin(
        self, principal: Principal, action: str, comment_id: CommentId
    ) -> None:
        if not principal.is_admin:
            logfire.warn(
                "Non-admin moderation attempt",
                action=action,
                comment_id=str(comment_id),
                user_id=str(principal.user_id),
            )
            raise ForbiddenError(
                action, "comment", str(comment_id), str(principal.user_id)
            )

    async def refresh_comment_count(self, article_id: ArticleId) -> int:
        """Recount an article's visible comments and store the result.

        The count is always recomputed, never incremented, so it heals after
        retried or racing moderation actions.

        The recount runs inside the request's uncommitted transaction, so
        under concurrent writes to the same article the stored count can
        briefly miss another request's change. The next write to that
        article recounts and corrects it.

        Args:
            article_id: Article to refresh

        Returns:
            The new count
        """
        with logfire.span(
            "comment_service.refresh_comment_count", article_id=str(article_id)
        ):
            count = await self.comment_repository.count_by_article(
                article_id, VISIBLE_STATUSES
            )
            await self.article_repository.update_comment_count(article_id, count)
            logfire.info(
                "Article comment count refreshed",
                article_id=str(article_id),
                comment_count=count,
            )
            return count

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def list_for_article(
        self,
        article_ref: str,
        viewer_id: UserId | None = None,
        sort: CommentSort = CommentSort.NEWEST,
    ) -> CommentThread:
        """Build an article's discussion thread for a viewer.

        Args:
            article_ref: Article UUID string or slug
            viewer_id: Viewer whose votes to include (None for anonymous)
            sort: Sibling ordering

        Returns:
            Nested thread with vote tallies and author records

        Raises:
            NotFoundError: If the article does not exist
        """
        with logfire.span(
            "comment_service.list_for_article",
            article_ref=article_ref,
            sort=sort.value,
        ):
            article = await self.get_article(article_ref)
            comments = await self.comment_repository.find_by_article(article.id)

            tallies = {comment.id: tally_for(comment, viewer_id) for comment in comments}
            roots = self.thread_builder.build(
                comments,
                tallies=tallies,
                sort=sort,
                max_depth=self.settings.max_depth,
            )
            authors = await self.get_authors(comments)
            total = sum(1 for comment in comments if comment.status.is_visible)

            logfire.info(
                "Comments retrieved for article",
                article_id=str(article.id),
                count=len(comments),
                visible=total,
            )
            return CommentThread(
                article=article, roots=roots, total=total, authors=authors
            )

    async def list_for_admin(
        self,
        principal: Principal,
        status: CommentStatus | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> CommentPage:
        """List comments across articles for moderation (admin only).

        Args:
            principal: Caller (must be admin)
            status: Filter by status (None for all)
            page: 1-based page number
            limit: Page size (defaults to the configured admin page size)

        Returns:
            Page of raw comments, newest first

        Raises:
            ForbiddenError: If the caller is not an admin
        """
        if not principal.is_admin:
            raise ForbiddenError(
                "list", "comments", "*", str(principal.user_id)
            )

        page = max(page, 1)
        limit = min(
            max(limit or self.settings.admin_page_size, 1),
            self.settings.admin_max_page_size,
        )
        with logfire.span(
            "comment_service.list_for_admin",
            status=status.value if status else None,
            page=page,
            limit=limit,
        ):
            items = await self.comment_repository.find_all(
                status=status, limit=limit, offset=(page - 1) * limit
            )
            total = await self.comment_repository.count(status=status)
            return CommentPage(items=items, total=total, page=page, limit=limit)
