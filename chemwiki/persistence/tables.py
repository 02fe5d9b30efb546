"""SQLAlchemy table definitions for chemwiki.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (Directory, owned by the identity provider)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(255), nullable=False),
    Column(
        "role",
        postgresql.ENUM("user", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_username", users_table.c.username)

# ============================================================================
# ARTICLES TABLE (Owned by the article host)
# ============================================================================
articles_table = Table(
    "articles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("slug", String(200), nullable=False, unique=True),
    Column("title", String(300), nullable=False),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

Index("idx_articles_slug", articles_table.c.slug, unique=True)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "article_id",
        UUID,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    # No cascade: replies are removed explicitly, children first
    Column(
        "parent_id",
        UUID,
        ForeignKey("comments.id", ondelete="RESTRICT"),
        nullable=True,
    ),
    # Not a foreign key: authors may disappear from the directory
    Column("author_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "status",
        postgresql.ENUM(
            "approved",
            "pending",
            "spam",
            "deleted",
            name="comment_status",
            create_type=False,
        ),
        nullable=False,
        server_default="approved",
    ),
    Column("upvoters", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("downvoters", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("reports", JSONB, nullable=False, server_default="[]"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("version", Integer, nullable=False, server_default="1"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("version >= 1", name="version_positive"),
    CheckConstraint("length(content) > 0", name="content_not_empty"),
)

Index("idx_comments_article_id", comments_table.c.article_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_status", comments_table.c.status)
Index("idx_comments_created_at", comments_table.c.created_at)
