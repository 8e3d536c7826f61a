"""PostgreSQL repository implementations."""

from relay.persistence.repository.follow import PostgresFollowRepository
from relay.persistence.repository.message import PostgresMessageRepository
from relay.persistence.repository.profile import PostgresProfileRepository

__all__ = [
    "PostgresFollowRepository",
    "PostgresMessageRepository",
    "PostgresProfileRepository",
]
