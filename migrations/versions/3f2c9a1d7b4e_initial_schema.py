"""initial_schema

Create the schema for the invitation service:
- Invites (email + role offers with a pending -> accepted/expired lifecycle)
- Cache entries (unlogged key-value cache for invite lookups)
- Rate events (unlogged sliding-window log for rate limits and spam checks)

Revision ID: 3f2c9a1d7b4e
Revises:
Create Date: 2026-10-18 10:12:44.301552

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f2c9a1d7b4e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_role AS ENUM ('admin', 'teacher', 'student');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE invite_status AS ENUM ('pending', 'accepted', 'expired');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.create_table(
        "invites",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(
                "admin", "teacher", "student", name="invite_role", create_type=False
            ),
            nullable=False,
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "accepted", "expired", name="invite_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("invited_by", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("accepted_by", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "expires_at > created_at", name="ck_invites_expiry_after_creation"
        ),
        # Acceptance details exist exactly when the invite is accepted
        sa.CheckConstraint(
            "(status = 'accepted') = (accepted_at IS NOT NULL)",
            name="ck_invites_accepted_at_status",
        ),
    )

    op.create_index("idx_invites_email", "invites", ["email"])
    op.create_index(
        "idx_invites_email_created_at",
        "invites",
        ["email", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_invites_status_expires_at", "invites", ["status", "expires_at"]
    )

    op.create_table(
        "cache_entries",
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("key"),
        prefixes=["UNLOGGED"],
    )
    op.create_index(
        "idx_cache_entries_expires_at", "cache_entries", ["expires_at"]
    )

    op.create_table(
        "rate_events",
        sa.Column("id", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("occurred_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        prefixes=["UNLOGGED"],
    )
    op.create_index(
        "idx_rate_events_key_occurred_at", "rate_events", ["key", "occurred_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("rate_events")
    op.drop_table("cache_entries")
    op.drop_table("invites")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS invite_status")
    op.execute("DROP TYPE IF EXISTS invite_role")
