"""Profile aggregate root.

One profile per identity. Identity fields are written by the identity
provider integration; the relay only maintains the social counters and
clears dead push tokens.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from relay.domain.model.common import DomainModel
from relay.domain.value import GeoPoint, Identity, ProfileId


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Profile(DomainModel):
    """User profile keyed by identity.

    Business rules:
    - identity is immutable once assigned
    - followers_count and following_count never go below zero
    """

    id: ProfileId
    identity: Identity
    name: Optional[str] = None
    username: Optional[str] = None
    profile_pic_url: Optional[str] = None
    push_token: Optional[str] = None
    followers_count: int = Field(default=0, ge=0)
    following_count: int = Field(default=0, ge=0)
    location: Optional[GeoPoint] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def display_name(self) -> str:
        """Best human-readable name available."""
        return self.name or self.username or self.identity.root
