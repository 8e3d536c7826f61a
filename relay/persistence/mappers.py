"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from relay.domain.model import Follow, Message, Profile
from relay.domain.value import FollowId, GeoPoint, Identity, MessageId, ProfileId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_profile(row: Dict[str, Any]) -> Profile:
    """Convert database row to Profile domain model.

    Args:
        row: Database row as dict

    Returns:
        Profile domain model
    """
    location = None
    if row.get("latitude") is not None and row.get("longitude") is not None:
        location = GeoPoint(latitude=row["latitude"], longitude=row["longitude"])

    return Profile(
        id=ProfileId(_uuid(row["id"])),
        identity=Identity(row["identity"]),
        name=row.get("name"),
        username=row.get("username"),
        profile_pic_url=row.get("profile_pic_url"),
        push_token=row.get("push_token"),
        followers_count=row["followers_count"],
        following_count=row["following_count"],
        location=location,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def profile_to_dict(profile: Profile) -> Dict[str, Any]:
    """Convert Profile domain model to database dict.

    Args:
        profile: Profile domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = profile.model_dump(exclude={"location"})
    data["latitude"] = profile.location.latitude if profile.location else None
    data["longitude"] = profile.location.longitude if profile.location else None
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(_uuid(row["id"])),
        sender_id=Identity(row["sender_id"]),
        receiver_id=Identity(row["receiver_id"]),
        text=row["text"],
        created_at=row["created_at"],
        expires_at=row.get("expires_at"),
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict.

    created_at is left to the database default.
    """
    return message.model_dump(exclude={"created_at"})


def row_to_follow(row: Dict[str, Any]) -> Follow:
    """Convert database row to Follow domain model."""
    return Follow(
        id=FollowId(_uuid(row["id"])),
        follower_id=Identity(row["follower_id"]),
        following_id=Identity(row["following_id"]),
        created_at=row["created_at"],
    )


def follow_to_dict(follow: Follow) -> Dict[str, Any]:
    """Convert Follow domain model to database dict."""
    return follow.model_dump()
