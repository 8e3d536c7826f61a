"""Expo push notification adapter."""

from .client import (
    ExpoPushError,
    ExpoPushNotifier,
    MockPushNotifier,
    NullPushNotifier,
    is_expo_push_token,
)

__all__ = [
    "ExpoPushError",
    "ExpoPushNotifier",
    "MockPushNotifier",
    "NullPushNotifier",
    "is_expo_push_token",
]
