"""create_freets

Create the freet store schema:
- Freets (content, authorship, timestamps)
- Freet votes (one row per freet and voter, upvote or downvote)

The users table belongs to the identity store and is not created here.

Revision ID: 3c1f0a7d2b94
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d2b94"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # FREETS table
    # ========================================================================
    op.create_table(
        "freets",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("anonymous", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "date_created",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "date_modified",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "date_modified >= date_created", name="modified_after_created"
        ),
    )
    op.create_index(
        "idx_freets_date_modified",
        "freets",
        [sa.text("date_modified DESC")],
    )
    op.create_index("idx_freets_author_id", "freets", ["author_id"])

    # ========================================================================
    # FREET_VOTES table
    # ========================================================================
    op.create_table(
        "freet_votes",
        sa.Column("freet_id", sa.UUID(), nullable=False),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", sa.String(16), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["freet_id"], ["freets.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("freet_id", "voter_id"),
        sa.CheckConstraint(
            "vote_type IN ('upvote', 'downvote')", name="vote_type_valid"
        ),
    )
    op.create_index("idx_freet_votes_freet_id", "freet_votes", ["freet_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("freet_votes")
    op.drop_table("freets")
