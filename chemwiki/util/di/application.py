"""Application layer DI providers."""

from dishka import Scope, provide

from chemwiki.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    ReplyToCommentUseCase,
    ReportCommentUseCase,
    UpdateCommentUseCase,
)
from chemwiki.application.usecase.moderation import (
    ListCommentsForAdminUseCase,
    ModerateCommentUseCase,
    PurgeCommentUseCase,
)
from chemwiki.application.usecase.vote import RemoveVoteUseCase, VoteCommentUseCase
from chemwiki.domain.service import CommentService, JWTService
from chemwiki.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_reply_to_comment_use_case(
        self, comment_service: CommentService
    ) -> ReplyToCommentUseCase:
        """Provide reply use case."""
        return ReplyToCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, jwt_service: JWTService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_report_comment_use_case(
        self, comment_service: CommentService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_vote_comment_use_case(
        self, comment_service: CommentService
    ) -> VoteCommentUseCase:
        """Provide vote use case."""
        return VoteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(
        self, comment_service: CommentService
    ) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(comment_service=comment_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_for_admin_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsForAdminUseCase:
        """Provide admin listing use case."""
        return ListCommentsForAdminUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        """Provide moderation use case."""
        return ModerateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_purge_comment_use_case(
        self, comment_service: CommentService
    ) -> PurgeCommentUseCase:
        """Provide purge use case."""
        return PurgeCommentUseCase(comment_service=comment_service)
