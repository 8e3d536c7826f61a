"""Domain services."""

from .base import Service
from .follow_service import FollowService
from .message_service import MessageService
from .notifier import PushNotifier
from .presence import Connection, PresenceDirectory
from .profile_service import ProfileService

__all__ = [
    "Connection",
    "FollowService",
    "MessageService",
    "PresenceDirectory",
    "ProfileService",
    "PushNotifier",
    "Service",
]
