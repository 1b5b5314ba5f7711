"""
Async Beams push notifications client.

Same operations as PushNotifications, awaited over httpx.AsyncClient.
Validation, body merge and response classification are shared.
"""

import logging
import time
import warnings
from typing import Any, Mapping, Optional, Sequence

import httpx

from pushnotifications.client import BasePushNotifications
from pushnotifications.constants import INTERESTS_KEY, USERS_KEY
from pushnotifications.core.logging_config import sanitize_log_value
from pushnotifications.payload import JSONValue, build_publish_body, serialize_publish_body
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


class AsyncPushNotifications(BasePushNotifications):
    """
    Asyncio client for the Beams push notifications API.

    Usage:
        async with AsyncPushNotifications(instance_id, secret_key) as beams_client:
            publish_id = await beams_client.publish_to_users(["user-0001"], publish_body)

    generate_token() is synchronous; it does no I/O.

    Attributes:
        config: Immutable client configuration
        _async_client: httpx AsyncClient (lazy initialized)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._async_client: Optional[httpx.AsyncClient] = None

    async def _get_async_client(self) -> httpx.AsyncClient:
        """Get or create the pooled async HTTP client."""
        if self._async_client is None or self._async_client.is_closed:
            self._async_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout),
            )
        return self._async_client

    async def _publish(self, url: str, key: str, targets: list, publish_body: Mapping[str, Any]) -> str:
        body = serialize_publish_body(build_publish_body(publish_body, key, targets))
        start_time = time.time()
        client = await self._get_async_client()

        try:
            response = await client.post(
                url,
                content=body,
                headers=build_headers(self.config),
            )
        except httpx.HTTPError as e:
            raise network_error(e, "publish notifications") from e

        publish_id = classify_publish_response(response)
        self._log_publish(publish_id, key, targets, start_time)
        return publish_id

    async def publish_to_interests(
        self,
        interests: Sequence[str],
        publish_body: Mapping[str, JSONValue],
    ) -> str:
        """Publish to interests. See PushNotifications.publish_to_interests."""
        interests = validate_interests(interests)
        return await self._publish(
            publish_interests_url(self.config),
            INTERESTS_KEY,
            interests,
            publish_body,
        )

    async def publish(
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
        return await self.publish_to_interests(interests, publish_body)

    async def publish_to_users(
        self,
        user_ids: Sequence[UserId],
        publish_body: Mapping[str, JSONValue],
    ) -> str:
        """Publish to users. See PushNotifications.publish_to_users."""
        user_ids = validate_user_ids(user_ids)
        return await self._publish(
            publish_users_url(self.config),
            USERS_KEY,
            user_ids,
            publish_body,
        )

    async def delete_user(self, user_id: UserId) -> None:
        """Remove all devices of a user. See PushNotifications.delete_user."""
        user_id = validate_user_id(user_id)
        client = await self._get_async_client()

        try:
            response = await client.delete(
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

    async def aclose(self) -> None:
        """Close the HTTP client and release pooled connections."""
        if self._async_client and not self._async_client.is_closed:
            await self._async_client.aclose()
            logger.debug("Async push notifications client closed")
        self._async_client = None

    async def __aenter__(self) -> "AsyncPushNotifications":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
