"""Exceptions raised by the push notifications client."""

from typing import Optional


class PushNotificationsError(Exception):
    """Base class for every error raised by this package"""
    pass


class InvalidConfiguration(PushNotificationsError):
    """Client constructed with missing or malformed settings"""
    pass


class ValidationError(PushNotificationsError):
    """A request was rejected locally, before any network call"""
    pass


class NoInterestsSupplied(ValidationError):
    pass


class TooManyInterests(ValidationError):
    pass


class EmptyInterestName(ValidationError):
    pass


class InterestNameTooLong(ValidationError):
    pass


class InterestInvalidCharacter(ValidationError):
    pass


class NoUsersSupplied(ValidationError):
    pass


class TooManyUsers(ValidationError):
    pass


class EmptyUserId(ValidationError):
    pass


class UserIdTooLong(ValidationError):
    pass


class InvalidUserIdEncoding(ValidationError):
    pass


class SerializationError(PushNotificationsError):
    """Publish body could not be encoded as JSON"""
    pass


class NetworkError(PushNotificationsError):
    """Request never produced a response (connect, timeout or read failure)"""
    pass


class InvalidResponseBody(PushNotificationsError):
    """The service answered with a body that is not the expected JSON"""
    pass


class RemoteRejected(PushNotificationsError):
    """
    The service answered with a well-formed error response.

    Attributes:
        status_code: HTTP status of the response
        error: Short error name from the response body
        description: Human-readable description from the response body
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error: str = "",
        description: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.description = description


class SigningError(PushNotificationsError):
    """Beams auth token could not be signed"""
    pass


class InvalidToken(PushNotificationsError):
    """Beams auth token failed verification"""
    pass
