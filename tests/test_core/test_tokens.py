"""
Tests for Beams auth token signing and verification.
"""

import time
from unittest.mock import patch

import jwt
import pytest

from pushnotifications.constants import JWT_ALGORITHM, TOKEN_TTL_SECONDS
from pushnotifications.errors import InvalidToken, SigningError
from pushnotifications.tokens import create_user_token, decode_token, token_issuer


INSTANCE_ID = "i-123"
SECRET_KEY = "k-456"


class TestCreateUserToken:
    """Tests for create_user_token."""

    def test_claims(self):
        """Token carries sub, iss and a 24h exp, verifiable with the secret key."""
        issued_at = int(time.time())
        token = create_user_token("u-123", INSTANCE_ID, SECRET_KEY)

        claims = jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])

        assert claims["sub"] == "u-123"
        assert claims["iss"] == "https://i-123.pushnotifications.pusher.com"
        assert claims["exp"] > issued_at
        assert claims["exp"] - issued_at <= TOKEN_TTL_SECONDS + 1

    def test_hs256_header(self):
        token = create_user_token("u-123", INSTANCE_ID, SECRET_KEY)

        assert jwt.get_unverified_header(token)["alg"] == "HS256"

    def test_explicit_issuance_time(self):
        token = create_user_token("u-123", INSTANCE_ID, SECRET_KEY, now=1_700_000_000)

        claims = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"verify_exp": False},
        )
        assert claims["exp"] == 1_700_000_000 + 24 * 60 * 60

    def test_wrong_secret_fails_verification(self):
        token = create_user_token("u-123", INSTANCE_ID, SECRET_KEY)

        with pytest.raises(jwt.InvalidSignatureError):
            jwt.decode(token, "another-secret", algorithms=[JWT_ALGORITHM])

    def test_fresh_token_each_call(self):
        """Tokens are not cached; a later call gets a later expiry."""
        first = create_user_token("u-123", INSTANCE_ID, SECRET_KEY, now=1_700_000_000)
        second = create_user_token("u-123", INSTANCE_ID, SECRET_KEY, now=1_700_000_001)

        assert first != second

    def test_signing_failure(self):
        """Errors raised by the JWT library surface as SigningError."""
        with patch("pushnotifications.tokens.jwt.encode", side_effect=jwt.PyJWTError("boom")):
            with pytest.raises(SigningError) as exc_info:
                create_user_token("u-123", INSTANCE_ID, SECRET_KEY)

        assert isinstance(exc_info.value.__cause__, jwt.PyJWTError)


class TestDecodeToken:
    """Tests for decode_token."""

    def test_round_trip(self):
        token = create_user_token("u-123", INSTANCE_ID, SECRET_KEY)

        claims = decode_token(token, INSTANCE_ID, SECRET_KEY)

        assert claims["sub"] == "u-123"
        assert claims["iss"] == token_issuer(INSTANCE_ID)

    def test_expired(self):
        token = create_user_token(
            "u-123",
            INSTANCE_ID,
            SECRET_KEY,
            now=time.time() - TOKEN_TTL_SECONDS - 60,
        )

        with pytest.raises(InvalidToken, match="expired"):
            decode_token(token, INSTANCE_ID, SECRET_KEY)

    def test_other_instance(self):
        token = create_user_token("u-123", "i-999", SECRET_KEY)

        with pytest.raises(InvalidToken):
            decode_token(token, INSTANCE_ID, SECRET_KEY)

    def test_garbage(self):
        with pytest.raises(InvalidToken):
            decode_token("not-a-jwt", INSTANCE_ID, SECRET_KEY)
