"""Follow edge entity."""

from datetime import datetime, timezone

from pydantic import Field

from relay.domain.model.common import DomainModel
from relay.domain.value import FollowId, Identity


class Follow(DomainModel):
    """Directed follow relationship.

    Business rules:
    - At most one edge per (follower_id, following_id) pair
      (enforced by database unique constraint)
    - follower_id != following_id
    """

    id: FollowId
    follower_id: Identity
    following_id: Identity
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
