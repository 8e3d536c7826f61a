"""initial_schema

Create the relay schema:
- Profiles (one per identity, denormalized follow counters, last location)
- Messages (durable chat history, optional expiry)
- Follows (directed social graph edges)

Revision ID: 3f1c9a7d2e04
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("identity", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("profile_pic_url", sa.Text(), nullable=True),
        sa.Column("push_token", sa.String(255), nullable=True),
        sa.Column("followers_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("following_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
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
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("identity", name="uq_profiles_identity"),
        sa.CheckConstraint(
            "followers_count >= 0", name="followers_count_non_negative"
        ),
        sa.CheckConstraint(
            "following_count >= 0", name="following_count_non_negative"
        ),
        sa.CheckConstraint(
            "(latitude IS NULL) = (longitude IS NULL)", name="location_complete"
        ),
    )
    op.create_index("idx_profiles_location", "profiles", ["latitude", "longitude"])

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("sender_id", sa.String(255), nullable=False),
        sa.Column("receiver_id", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_messages_sender_receiver_created",
        "messages",
        ["sender_id", "receiver_id", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_messages_receiver_sender_created",
        "messages",
        ["receiver_id", "sender_id", sa.text("created_at DESC")],
    )
    op.create_index("idx_messages_expires_at", "messages", ["expires_at"])

    # ========================================================================
    # FOLLOWS table
    # ========================================================================
    op.create_table(
        "follows",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("follower_id", sa.String(255), nullable=False),
        sa.Column("following_id", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("follower_id", "following_id", name="unique_follow"),
        sa.CheckConstraint("follower_id <> following_id", name="no_self_follow"),
    )
    op.create_index("idx_follows_following_id", "follows", ["following_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_follows_following_id", table_name="follows")
    op.drop_table("follows")

    op.drop_index("idx_messages_expires_at", table_name="messages")
    op.drop_index("idx_messages_receiver_sender_created", table_name="messages")
    op.drop_index("idx_messages_sender_receiver_created", table_name="messages")
    op.drop_table("messages")

    op.drop_index("idx_profiles_location", table_name="profiles")
    op.drop_table("profiles")
