"""SQLAlchemy table definitions for the relay.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# PROFILES TABLE
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("identity", String(255), nullable=False, unique=True),  # auth0 sub
    Column("name", String(255), nullable=True),
    Column("username", String(255), nullable=True),
    Column("profile_pic_url", Text, nullable=True),
    Column("push_token", String(255), nullable=True),
    Column("followers_count", Integer, nullable=False, server_default="0"),
    Column("following_count", Integer, nullable=False, server_default="0"),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("followers_count >= 0", name="followers_count_non_negative"),
    CheckConstraint("following_count >= 0", name="following_count_non_negative"),
    CheckConstraint(
        "(latitude IS NULL) = (longitude IS NULL)", name="location_complete"
    ),
)

Index("idx_profiles_location", profiles_table.c.latitude, profiles_table.c.longitude)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("sender_id", String(255), nullable=False),
    Column("receiver_id", String(255), nullable=False),
    Column("text", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
)

# Both directions of a conversation, newest first
Index(
    "idx_messages_sender_receiver_created",
    messages_table.c.sender_id,
    messages_table.c.receiver_id,
    messages_table.c.created_at.desc(),
)
Index(
    "idx_messages_receiver_sender_created",
    messages_table.c.receiver_id,
    messages_table.c.sender_id,
    messages_table.c.created_at.desc(),
)
Index("idx_messages_expires_at", messages_table.c.expires_at)

# ============================================================================
# FOLLOWS TABLE
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("follower_id", String(255), nullable=False),
    Column("following_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("follower_id", "following_id", name="unique_follow"),
    CheckConstraint("follower_id <> following_id", name="no_self_follow"),
)

Index("idx_follows_following_id", follows_table.c.following_id)
