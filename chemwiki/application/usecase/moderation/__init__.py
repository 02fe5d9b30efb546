"""Moderation use cases."""

from .list_comments import (
    AdminCommentItem,
    ListCommentsForAdminRequest,
    ListCommentsForAdminResponse,
    ListCommentsForAdminUseCase,
)
from .moderate_comment import (
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
)
from .purge_comment import (
    PurgeCommentRequest,
    PurgeCommentResponse,
    PurgeCommentUseCase,
)

__all__ = [
    "AdminCommentItem",
    "ListCommentsForAdminRequest",
    "ListCommentsForAdminResponse",
    "ListCommentsForAdminUseCase",
    "ModerateCommentRequest",
    "ModerateCommentResponse",
    "ModerateCommentUseCase",
    "PurgeCommentRequest",
    "PurgeCommentResponse",
    "PurgeCommentUseCase",
]
