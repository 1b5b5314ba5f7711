"""
Server-side client for the Pusher Beams push notifications API.

This package contains:
- PushNotifications - blocking client (publish, delete user, auth tokens)
- AsyncPushNotifications - asyncio client with the same operations
- Validators for interests and user ids
- The error taxonomy raised by every operation
"""

__version__ = "2.0.0"

from pushnotifications.client import BasePushNotifications, PushNotifications
from pushnotifications.async_client import AsyncPushNotifications
from pushnotifications.errors import (
    EmptyInterestName,
    EmptyUserId,
    InterestInvalidCharacter,
    InterestNameTooLong,
    InvalidConfiguration,
    InvalidResponseBody,
    InvalidToken,
    InvalidUserIdEncoding,
    NetworkError,
    NoInterestsSupplied,
    NoUsersSupplied,
    PushNotificationsError,
    RemoteRejected,
    SerializationError,
    SigningError,
    TooManyInterests,
    TooManyUsers,
    UserIdTooLong,
    ValidationError,
)
from pushnotifications.models import ClientConfig
from pushnotifications.payload import build_publish_body
from pushnotifications.tokens import decode_token
from pushnotifications.validators import (
    validate_interests,
    validate_user_id,
    validate_user_ids,
)

__all__ = [
    # Clients
    "PushNotifications",
    "AsyncPushNotifications",
    "BasePushNotifications",
    "ClientConfig",
    # Helpers
    "build_publish_body",
    "decode_token",
    "validate_interests",
    "validate_user_id",
    "validate_user_ids",
    # Errors
    "PushNotificationsError",
    "InvalidConfiguration",
    "ValidationError",
    "NoInterestsSupplied",
    "TooManyInterests",
    "EmptyInterestName",
    "InterestNameTooLong",
    "InterestInvalidCharacter",
    "NoUsersSupplied",
    "TooManyUsers",
    "EmptyUserId",
    "UserIdTooLong",
    "InvalidUserIdEncoding",
    "SerializationError",
    "NetworkError",
    "InvalidResponseBody",
    "RemoteRejected",
    "SigningError",
    "InvalidToken",
]
