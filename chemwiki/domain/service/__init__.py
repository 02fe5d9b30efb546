"""Domain services."""

from .base import CommentWriter, Service
from .comment_service import CommentPage, CommentService, CommentThread, PurgeResult
from .jwt_service import JWTService
from .moderation_gate import ModerationGate
from .thread_builder import CommentTreeNode, ThreadBuilder
from .vote_ledger import VoteLedger

__all__ = [
    "CommentPage",
    "CommentService",
    "CommentThread",
    "CommentTreeNode",
    "CommentWriter",
    "JWTService",
    "ModerationGate",
    "PurgeResult",
    "Service",
    "ThreadBuilder",
    "VoteLedger",
]
