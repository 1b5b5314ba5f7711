"""
Beams push notifications client.

Publishes notifications to interests or authenticated users, deletes a
user's devices, and mints Beams auth tokens for device SDKs.

Features:
- Validation of interests and user ids before any network call
- Single-attempt HTTP requests with a configurable deadline (no retries)
- Connection pooling through a lazily created httpx client
- HS256 Beams auth tokens signed with the instance secret key
"""

import logging
import threading
import time
import warnings
from typing import Any, Dict, Mapping, Optional, Sequence

import httpx

from pushnotifications.constants import INTERESTS_KEY, USERS_KEY
from pushnotifications.core.config import Settings, get_settings
from pushnotifications.core.logging_config import sanitize_log_value
from pushnotifications.errors import InvalidConfiguration
from pushnotifications.models import ClientConfig, Timeout
from pushnotifications.payload import JSONValue, build_publish_body, serialize_publish_body
from pushnotifications.tokens import create_user_token
from pushnotifications.transport import (
    build_headers,
    classify_delete_user_response,
    classify_publish_response,
    delete_user_url,
    network_error,
    publish_interests_url,
    publish_users_url,
)
from pushnotifications.validators import (
    UserId,
    validate_interests,
    validate_user_id,
    validate_user_ids,
)

logger = logging.getLogger(__name__)


class BasePushNotifications:
    """
    Configuration and I/O-free operations shared by the sync and async clients.

    Attributes:
        config: Immutable client configuration
    """

    def __init__(
        self,
        instance_id: str,
        secret_key: str,
        request_timeout: Optional[Timeout] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize the client. No network call is made.

        Args:
            instance_id: Beams instance ID
            secret_key: Beams instance secret key
            request_timeout: Per-request deadline, seconds or timedelta (default 60s)
            base_url: Override the API base URL; may contain ``{instance_id}``

        Raises:
            InvalidConfiguration: If a credential is empty or an override is invalid
        """
        self.config = ClientConfig.build(
            instance_id,
            secret_key,
            request_timeout=request_timeout,
            base_url=base_url,
        )

        logger.debug(
            "Push notifications client initialized",
            extra={
                "instance_id": self.config.instance_id,
                "base_url": self.config.base_url,
                "request_timeout": self.config.request_timeout,
            }
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None):
        """
        Build a client from BEAMS_* environment settings.

        Raises:
            InvalidConfiguration: If BEAMS_INSTANCE_ID or BEAMS_SECRET_KEY is missing
        """
        settings = settings or get_settings()
        if not settings.beams_ready:
            raise InvalidConfiguration(
                "BEAMS_INSTANCE_ID and BEAMS_SECRET_KEY must be set"
            )
        return cls(
            settings.BEAMS_INSTANCE_ID,
            settings.BEAMS_SECRET_KEY,
            request_timeout=settings.BEAMS_REQUEST_TIMEOUT_SECONDS,
            base_url=settings.BEAMS_BASE_URL,
        )

    @property
    def instance_id(self) -> str:
        return self.config.instance_id

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(instance_id={self.config.instance_id!r}, "
            f"base_url={self.config.base_url!r})"
        )

    def _log_publish(self, publish_id: str, key: str, targets: list, start_time: float) -> None:
        logger.info(
            "Beams publish accepted",
            extra={
                "publish_id": publish_id,
                "target_type": key,
                "target_count": len(targets),
                "duration_ms": int((time.time() - start_time) * 1000),
            }
        )

    def generate_token(self, user_id: UserId) -> Dict[str, str]:
        """
        Create a Beams auth token for a user. No network call is made.

        Returns:
            {"token": "<signed JWT>"}, ready to return from a Beams auth endpoint

        Raises:
            ValidationError: The user id is invalid
            SigningError: The token could not be signed
        """
        user_id = validate_user_id(user_id)
        token = create_user_token(
            user_id,
            self.config.instance_id,
            self.config.secret_key,
        )
        return {"token": token}


class PushNotifications(BasePushNotifications):
    """
    Blocking client for the Beams push notifications API.

    Safe to share between threads: configuration is immutable and each call
    is an independent request on httpx's connection pool.

    Usage:
        beams_client = PushNotifications(
            instance_id="8a070eaa-033f-46d6-bb90-f4c15acc47e1",
            secret_key="...",
        )
        publish_id = beams_client.publish_to_interests(
            ["hello"],
            {"fcm": {"notification": {"title": "Hello", "body": "Hello, world"}}},
        )

    Attributes:
        config: Immutable client configuration
        _client: httpx Client (lazy initialized)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        """Get or create the pooled HTTP client."""
        with self._client_lock:
            if self._client is None or self._client.is_closed:
                self._client = httpx.Client(timeout=httpx.Timeout(self.config.request_timeout))
            return self._client

    def _publish(self, url: str, key: str, targets: list, publish_body: Mapping[str, Any]) -> str:
        body = serialize_publish_body(build_publish_body(publish_body, key, targets))
        start_time = time.time()

        try:
            response = self._get_client().post(
                url,
                content=body,
                headers=build_headers(self.config),
            )
        except httpx.HTTPError as e:
            raise network_error(e, "publish notifications") from e

        publish_id = classify_publish_response(response)
        self._log_publish(publish_id, key, targets, start_time)
        return publish_id

    def publish_to_interests(
        self,
        interests: Sequence[str],
        publish_body: Mapping[str, JSONValue],
    ) -> str:
        """
        Publish a notification to every device subscribed to at least one
        of the interests.

        Args:
            interests: 1 to 100 interest names
            publish_body: Platform payloads, e.g. {"apns": {...}, "fcm": {...}}

        Returns:
            Publish id assigned by Beams

        Raises:
            ValidationError: Interests are invalid (no request is sent)
            SerializationError: publish_body cannot be encoded as JSON
            NetworkError: The request failed or timed out
            InvalidResponseBody: Beams returned a malformed body
            RemoteRejected: Beams rejected the publish
        """
        interests = validate_interests(interests)
        return self._publish(
            publish_interests_url(self.config),
            INTERESTS_KEY,
            interests,
            publish_body,
        )

    def publish(
        self,
        interests: Sequence[str],
        publish_body: Mapping[str, JSONValue],
    ) -> str:
        """Deprecated alias of publish_to_interests."""
        warnings.warn(
            "publish() is deprecated, use publish_to_interests()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.publish_to_interests(interests, publish_body)

    def publish_to_users(
        self,
        user_ids: Sequence[UserId],
        publish_body: Mapping[str, JSONValue],
    ) -> str:
        """
        Publish a notification to every device of the given users.

        Args:
            user_ids: 1 to 1000 user ids
            publish_body: Platform payloads, e.g. {"apns": {...}, "fcm": {...}}

        Returns:
            Publish id assigned by Beams

        Raises:
            ValidationError: User ids are invalid (no request is sent)
            SerializationError: publish_body cannot be encoded as JSON
            NetworkError: The request failed or timed out
            InvalidResponseBody: Beams returned a malformed body
            RemoteRejected: Beams rejected the publish
        """
        user_ids = validate_user_ids(user_ids)
        return self._publish(
            publish_users_url(self.config),
            USERS_KEY,
            user_ids,
            publish_body,
        )

    def delete_user(self, user_id: UserId) -> None:
        """
        Remove all devices associated with a user.

        Raises:
            ValidationError: The user id is invalid (no request is sent)
            NetworkError: The request failed or timed out
            InvalidResponseBody: Beams returned a malformed error body
            RemoteRejected: Beams rejected the request
        """
        user_id = validate_user_id(user_id)

        try:
            response = self._get_client().delete(
                delete_user_url(self.config, user_id),
                headers=build_headers(self.config),
            )
        except httpx.HTTPError as e:
            raise network_error(e, "delete user") from e

        classify_delete_user_response(response)

        logger.info(
            "Beams user deleted",
            extra={"user_id": sanitize_log_value(user_id)}
        )

    def close(self) -> None:
        """Close the HTTP client and release pooled connections."""
        with self._client_lock:
            if self._client and not self._client.is_closed:
                self._client.close()
                logger.debug("Push notifications client closed")
            self._client = None

    def __enter__(self) -> "PushNotifications":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
