"""SQLAlchemy table definitions for Agora.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

votable_type_enum = postgresql.ENUM(
    "post", "comment", name="votable_type", create_type=False
)
vote_type_enum = postgresql.ENUM("up", "down", name="vote_type", create_type=False)
karma_category_enum = postgresql.ENUM(
    "post", "comment", "award", name="karma_category", create_type=False
)

# ============================================================================
# USERS TABLE (owned by the accounts service, read-only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("handle", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_handle", users_table.c.handle)

# ============================================================================
# POSTS / COMMENTS TABLES (owned by the content service, read-only here)
# Only the columns needed to resolve a votable's author are mapped.
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_posts_author_id", posts_table.c.author_id)

comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("votable_type", votable_type_enum, nullable=False),
    Column("votable_id", UUID, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),  # Denormalized from posts/comments
    Column("vote_type", vote_type_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
# Reconciliation tally
Index("idx_votes_author", votes_table.c.author_id, votes_table.c.votable_type)

# ============================================================================
# USER KARMA TABLE (ledger, one row per user)
# ============================================================================
user_karma_table = Table(
    "user_karma",
    metadata,
    Column(
        "user_id",
        UUID,
        ForeignKey("users.id", ondelete="RESTRICT"),  # Ledger entries are never deleted
        primary_key=True,
    ),
    Column("post_karma", Integer, nullable=False, server_default="0"),
    Column("comment_karma", Integer, nullable=False, server_default="0"),
    Column("award_karma", Integer, nullable=False, server_default="0"),
    Column("total_karma", Integer, nullable=False, server_default="0"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "total_karma = post_karma + comment_karma + award_karma",
        name="total_karma_is_sum",
    ),
)

Index("idx_user_karma_total", user_karma_table.c.total_karma.desc())

# ============================================================================
# KARMA EVENTS TABLE (one row per applied vote transition)
# ============================================================================
karma_events_table = Table(
    "karma_events",
    metadata,
    Column("id", UUID, primary_key=True),  # Vote transition event id
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    ),
    Column("category", karma_category_enum, nullable=False),
    Column("delta", Integer, nullable=False),
    Column("applied_delta", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_karma_events_user_created",
    karma_events_table.c.user_id,
    karma_events_table.c.created_at.desc(),
)

# ============================================================================
# AUDIT LOGS TABLE
# ============================================================================
audit_logs_table = Table(
    "audit_logs",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("actor_id", UUID, nullable=False),
    Column("action", String(64), nullable=False),
    Column("resource", String(64), nullable=False),
    Column("resource_id", String(255), nullable=False),
    Column("details", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_audit_logs_actor_created",
    audit_logs_table.c.actor_id,
    audit_logs_table.c.created_at.desc(),
)
