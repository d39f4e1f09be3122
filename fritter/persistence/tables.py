"""SQLAlchemy table definitions for Fritter.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (owned by the identity store, read-only here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("friends", ARRAY(String(255)), nullable=False, server_default="{}"),
)

# ============================================================================
# FREETS TABLE
# ============================================================================
freets_table = Table(
    "freets",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("author_id", UUID, nullable=False),  # Reference into identity store
    Column("content", Text, nullable=False),
    Column("anonymous", Boolean, nullable=False, server_default="false"),
    Column(
        "date_created", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "date_modified", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("date_modified >= date_created", name="modified_after_created"),
)

Index("idx_freets_date_modified", freets_table.c.date_modified.desc())
Index("idx_freets_author_id", freets_table.c.author_id)

# ============================================================================
# FREET_VOTES TABLE
# ============================================================================
# One row per (freet, voter): a voter can never be both an upvoter and a
# downvoter of the same freet.
freet_votes_table = Table(
    "freet_votes",
    metadata,
    Column(
        "freet_id",
        UUID,
        ForeignKey("freets.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("voter_id", UUID, primary_key=True),
    Column("vote_type", String(16), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_type IN ('upvote', 'downvote')", name="vote_type_valid"),
)

Index("idx_freet_votes_freet_id", freet_votes_table.c.freet_id)
