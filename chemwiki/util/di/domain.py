"""Domain layer DI providers."""

from dishka import Scope, provide

from chemwiki.config import AuthSettings, CommentSettings
from chemwiki.domain.repository import (
    ArticleRepository,
    CommentRepository,
    UserRepository,
)
from chemwiki.domain.service import (
    CommentService,
    JWTService,
    ModerationGate,
    ThreadBuilder,
    VoteLedger,
)
from chemwiki.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_thread_builder(self, settings: CommentSettings) -> ThreadBuilder:
        """Provide thread builder (stateless, shared)."""
        return ThreadBuilder(
            max_depth=settings.max_depth,
            deleted_placeholder=settings.deleted_placeholder,
            removed_placeholder=settings.removed_placeholder,
        )

    @provide
    def get_vote_ledger(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> VoteLedger:
        """Provide vote ledger domain service."""
        return VoteLedger(
            comment_repository=comment_repository,
            retry_limit=settings.write_retry_limit,
        )

    @provide
    def get_moderation_gate(
        self, comment_repository: CommentRepository, settings: CommentSettings
    ) -> ModerationGate:
        """Provide moderation gate domain service."""
        return ModerationGate(comment_repository=comment_repository, settings=settings)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        article_repository: ArticleRepository,
        user_repository: UserRepository,
        vote_ledger: VoteLedger,
        moderation_gate: ModerationGate,
        thread_builder: ThreadBuilder,
        settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            article_repository=article_repository,
            user_repository=user_repository,
            vote_ledger=vote_ledger,
            moderation_gate=moderation_gate,
            thread_builder=thread_builder,
            settings=settings,
        )
