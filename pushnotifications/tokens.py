"""
Beams auth tokens.

A device SDK authenticating as a user presents a token minted here by the
customer's backend. Tokens are HS256 JWTs signed with the instance secret
key and are never cached: every call signs a fresh one.
"""

import logging
import time
from typing import Any, Dict, Optional

import jwt

from pushnotifications.constants import (
    JWT_ALGORITHM,
    TOKEN_ISSUER_TEMPLATE,
    TOKEN_TTL_SECONDS,
)
from pushnotifications.core.logging_config import sanitize_log_value
from pushnotifications.errors import InvalidToken, SigningError

logger = logging.getLogger(__name__)


def token_issuer(instance_id: str) -> str:
    """Issuer claim expected by Beams for the given instance."""
    return TOKEN_ISSUER_TEMPLATE.format(instance_id=instance_id)


def create_user_token(
    user_id: str,
    instance_id: str,
    secret_key: str,
    now: Optional[float] = None,
) -> str:
    """
    Sign a Beams auth token for a user.

    The user id must already be validated.

    Args:
        user_id: Subject of the token
        instance_id: Beams instance the token is issued for
        secret_key: Instance secret key used as the HMAC key
        now: Issuance time as epoch seconds (defaults to current time)

    Returns:
        Compact JWT string

    Raises:
        SigningError: If the token cannot be signed
    """
    issued_at = int(time.time() if now is None else now)
    claims = {
        "sub": user_id,
        "iss": token_issuer(instance_id),
        "exp": issued_at + TOKEN_TTL_SECONDS,
    }

    try:
        token = jwt.encode(claims, secret_key, algorithm=JWT_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise SigningError(
            "Failed to sign the JWT token used for User Authentication"
        ) from e

    logger.debug(
        "Generated Beams auth token",
        extra={
            "user_id": sanitize_log_value(user_id),
            "instance_id": instance_id,
            "expires_in": TOKEN_TTL_SECONDS,
        }
    )

    return token


def decode_token(token: str, instance_id: str, secret_key: str) -> Dict[str, Any]:
    """
    Verify a Beams auth token and return its claims.

    Checks signature, expiry and issuer.

    Raises:
        InvalidToken: If the token is expired, forged or issued for another instance
    """
    try:
        return jwt.decode(
            token,
            secret_key,
            algorithms=[JWT_ALGORITHM],
            issuer=token_issuer(instance_id),
            options={"require": ["sub", "iss", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        logger.debug("Beams auth token has expired")
        raise InvalidToken("Token has expired") from e
    except jwt.PyJWTError as e:
        logger.warning(f"Invalid Beams auth token: {e}")
        raise InvalidToken("Invalid token") from e
