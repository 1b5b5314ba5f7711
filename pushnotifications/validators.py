"""
Request validation for publish, delete and token operations.

All checks run before any I/O and fail on the first violation. The
functions never mutate their arguments; they return new lists.
"""

import re
from typing import List, Sequence, Union

from pushnotifications.constants import (
    INTEREST_PATTERN,
    MAX_INTEREST_LENGTH,
    MAX_INTERESTS_PER_PUBLISH,
    MAX_USER_ID_LENGTH,
    MAX_USERS_PER_PUBLISH,
)
from pushnotifications.errors import (
    EmptyInterestName,
    EmptyUserId,
    InterestInvalidCharacter,
    InterestNameTooLong,
    InvalidUserIdEncoding,
    NoInterestsSupplied,
    NoUsersSupplied,
    TooManyInterests,
    TooManyUsers,
    UserIdTooLong,
    ValidationError,
)

UserId = Union[str, bytes]

_interest_re = re.compile(INTEREST_PATTERN)


def _as_list(values, what: str) -> list:
    # A lone string is iterable but is never a list of ids
    if isinstance(values, (str, bytes)):
        raise ValidationError(f"{what} must be a list of strings, not a single string")
    if values is None:
        return []
    try:
        return list(values)
    except TypeError:
        raise ValidationError(f"{what} must be a list of strings")


def validate_interests(interests: Sequence[str]) -> List[str]:
    """
    Validate the interests of a publish request.

    Args:
        interests: Interest names, in publish order

    Returns:
        A new list holding the same interests

    Raises:
        NoInterestsSupplied: No interests given
        TooManyInterests: More than 100 interests
        EmptyInterestName: An interest is the empty string
        InterestNameTooLong: An interest is longer than 164 characters
        InterestInvalidCharacter: An interest uses a character outside [A-Za-z0-9_-=@,.;]
    """
    interests = _as_list(interests, "Interests")

    if len(interests) == 0:
        raise NoInterestsSupplied("No interests were supplied")

    if len(interests) > MAX_INTERESTS_PER_PUBLISH:
        raise TooManyInterests(
            f"Too many interests supplied ({len(interests)}): "
            f"API only supports up to {MAX_INTERESTS_PER_PUBLISH}"
        )

    for interest in interests:
        if not isinstance(interest, str):
            raise InterestInvalidCharacter(f"Interest {interest!r} is not a string")

        if len(interest) == 0:
            raise EmptyInterestName("An empty interest name is not valid")

        if len(interest) > MAX_INTEREST_LENGTH:
            raise InterestNameTooLong(
                f"Interest length is {len(interest)} which is over "
                f"{MAX_INTEREST_LENGTH} characters"
            )

        # fullmatch so a trailing newline cannot slip past the $ anchor
        if not _interest_re.fullmatch(interest):
            raise InterestInvalidCharacter(
                f"Interest `{interest}` contains a forbidden character: "
                "Allowed characters are: ASCII upper/lower-case letters, "
                "numbers or one of _-=@,.;"
            )

    return interests


def _decode_user_id(user_id: UserId) -> str:
    """Return user_id as str, raising UnicodeError if it is not valid UTF-8."""
    if isinstance(user_id, bytes):
        return user_id.decode("utf-8")
    # Lone surrogates (e.g. from surrogateescape) have no UTF-8 encoding
    user_id.encode("utf-8")
    return user_id


def _encoded_length(user_id: UserId) -> int:
    # The service limits ids by UTF-8 byte length
    if isinstance(user_id, bytes):
        return len(user_id)
    return len(user_id.encode("utf-8", "surrogatepass"))


def _check_user_id_shape(user_id: UserId) -> None:
    if not isinstance(user_id, (str, bytes)):
        raise ValidationError(f"User Id {user_id!r} is not a string")

    if len(user_id) == 0:
        raise EmptyUserId("User Id cannot be empty")

    length = _encoded_length(user_id)
    if length > MAX_USER_ID_LENGTH:
        raise UserIdTooLong(
            f"User Id ('{user_id!s}') length too long "
            f"(maximum is {MAX_USER_ID_LENGTH} characters, got {length})"
        )


def validate_user_id(user_id: UserId) -> str:
    """
    Validate a single user id (delete user, token generation).

    Returns:
        The user id as str

    Raises:
        EmptyUserId, UserIdTooLong, InvalidUserIdEncoding
    """
    _check_user_id_shape(user_id)
    try:
        return _decode_user_id(user_id)
    except UnicodeError as e:
        raise InvalidUserIdEncoding("User Id must be encoded using utf8") from e


def validate_user_ids(user_ids: Sequence[UserId]) -> List[str]:
    """
    Validate the user ids of a publish-to-users request.

    Args:
        user_ids: User ids, in publish order

    Returns:
        A new list of the user ids as str

    Raises:
        NoUsersSupplied: No user ids given
        TooManyUsers: More than 1000 user ids
        EmptyUserId: A user id is empty
        UserIdTooLong: A user id is longer than 164 bytes in UTF-8
        InvalidUserIdEncoding: A user id is not valid UTF-8 (message names its index)
    """
    user_ids = _as_list(user_ids, "User ids")

    if len(user_ids) == 0:
        raise NoUsersSupplied("Must supply at least one user id")

    if len(user_ids) > MAX_USERS_PER_PUBLISH:
        raise TooManyUsers(
            f"Too many user ids supplied. API supports up to "
            f"{MAX_USERS_PER_PUBLISH}, got {len(user_ids)}"
        )

    validated = []
    for index, user_id in enumerate(user_ids):
        _check_user_id_shape(user_id)
        try:
            validated.append(_decode_user_id(user_id))
        except UnicodeError as e:
            raise InvalidUserIdEncoding(f"User Id at index {index} is not valid utf8") from e

    return validated
