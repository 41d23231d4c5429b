"""SQLAlchemy table definitions for the invitation service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Enum,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("email", String(320), nullable=False),  # Normalized (lower-case)
    Column(
        "role",
        Enum("admin", "teacher", "student", name="invite_role", create_type=False),
        nullable=False,
    ),
    Column(
        "status",
        Enum("pending", "accepted", "expired", name="invite_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column("invited_by", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("accepted_by", String(255), nullable=True),
    CheckConstraint("expires_at > created_at", name="ck_invites_expiry_after_creation"),
    CheckConstraint(
        "(status = 'accepted') = (accepted_at IS NOT NULL)",
        name="ck_invites_accepted_at_status",
    ),
)

Index("idx_invites_email", invites_table.c.email)
Index(
    "idx_invites_email_created_at",
    invites_table.c.email,
    invites_table.c.created_at.desc(),
)
# Cleanup scans pending invites by expiry
Index("idx_invites_status_expires_at", invites_table.c.status, invites_table.c.expires_at)

# ============================================================================
# KEY-VALUE CACHE (unlogged, not crash-safe, never part of invite transactions)
# ============================================================================
cache_entries_table = Table(
    "cache_entries",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("payload", Text, nullable=False),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
    prefixes=["UNLOGGED"],
)

Index("idx_cache_entries_expires_at", cache_entries_table.c.expires_at)

# ============================================================================
# RATE / SPAM COUNTER EVENTS (unlogged, pruned as the window slides)
# ============================================================================
rate_events_table = Table(
    "rate_events",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("key", String(255), nullable=False),
    Column("occurred_at", TIMESTAMP(timezone=True), nullable=False),
    prefixes=["UNLOGGED"],
)

Index("idx_rate_events_key_occurred_at", rate_events_table.c.key, rate_events_table.c.occurred_at)
