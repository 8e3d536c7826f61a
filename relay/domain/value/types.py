"""Domain value objects for the relay.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

from enum import Enum

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from relay.domain.error import ValidationError
from relay.domain.value.common import (
    RootValueObject,
    ValueObject,
    validation_message,
)


class Identity(RootValueObject[str]):
    """Stable external user reference issued by the identity provider.

    Opaque to the relay (e.g. ``auth0|64f0c2``, ``google-oauth2|1034``).
    """

    @field_validator("root")
    @classmethod
    def validate_identity(cls, v: str) -> str:
        """Validate identity is not blank and within length limits."""
        if not v or not v.strip():
            raise ValueError("Identity must not be empty")
        if len(v) > 255:
            raise ValueError("Identity must be at most 255 characters")
        return v

    @classmethod
    def parse(cls, value: object) -> "Identity":
        """Validate a raw identity.

        Raises:
            ValidationError: Carrying the validator's message when rejected
        """
        try:
            return cls(value)
        except PydanticValidationError as e:
            raise ValidationError(validation_message(e)) from e


class GeoPoint(ValueObject):
    """WGS84 coordinate."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class CounterField(str, Enum):
    """Denormalized social counters on a profile."""

    FOLLOWERS = "followers_count"
    FOLLOWING = "following_count"


class FollowOutcome(str, Enum):
    """Terminal states of a follow/unfollow request."""

    FOLLOWED = "followed"
    ALREADY_FOLLOWING = "already_following"
    UNFOLLOWED = "unfollowed"
    NOT_FOLLOWING = "not_following"

    @property
    def mutated(self) -> bool:
        """Whether the social graph changed."""
        return self in (FollowOutcome.FOLLOWED, FollowOutcome.UNFOLLOWED)


class DeliveryPath(str, Enum):
    """How a persisted message reached its recipient."""

    LIVE = "live"
    PUSH = "push"


class PushResult(str, Enum):
    """Outcome of a single push notification attempt."""

    OK = "ok"
    TOKEN_INVALID = "token_invalid"
    ERROR = "error"


class PushNotification(ValueObject):
    """Payload handed to the push notifier."""

    title: str
    body: str
    image_url: str | None = None
    data: dict[str, str] = Field(default_factory=dict)
