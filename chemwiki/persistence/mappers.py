"""Mappers between database rows and domain models.

Rows arrive as plain dicts (``row._asdict()``). UUID columns may come back
as strings or ``uuid.UUID`` depending on the driver, so both are accepted.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from chemwiki.domain.model import Article, Comment, CommentReport, User
from chemwiki.domain.value import (
    ArticleId,
    CommentId,
    CommentStatus,
    Slug,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _user_ids(values: Iterable[Any] | None) -> frozenset[UserId]:
    return frozenset(UserId(_uuid(value)) for value in values or ())


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        role=UserRole(row["role"]),
        created_at=row["created_at"],
    )


def row_to_article(row: Dict[str, Any]) -> Article:
    """Convert database row to Article domain model.

    Args:
        row: Database row as dict

    Returns:
        Article domain model
    """
    return Article(
        id=ArticleId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        article_id=ArticleId(_uuid(row["article_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        content=row["content"],
        status=CommentStatus(row["status"]),
        upvoters=_user_ids(row.get("upvoters")),
        downvoters=_user_ids(row.get("downvoters")),
        reports=tuple(
            CommentReport.model_validate(report) for report in row.get("reports") or ()
        ),
        is_edited=row["is_edited"],
        edited_at=row.get("edited_at"),
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Vote sets become sorted arrays and reports become JSON-ready dicts.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = comment.model_dump(exclude={"upvoters", "downvoters", "reports"})
    data["status"] = comment.status.value
    data["upvoters"] = sorted(comment.upvoters, key=str)
    data["downvoters"] = sorted(comment.downvoters, key=str)
    data["reports"] = [report.model_dump(mode="json") for report in comment.reports]
    return data
