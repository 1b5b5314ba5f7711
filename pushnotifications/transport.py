"""
Request building and response classification shared by the sync and
async clients.

One request is made per operation. Nothing here retries: a transport
failure becomes NetworkError, a non-200 becomes RemoteRejected.
"""

import logging
from typing import Dict
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from pushnotifications import __version__
from pushnotifications.constants import (
    DELETE_USER_PATH,
    LIBRARY_HEADER,
    LIBRARY_NAME,
    PUBLISH_INTERESTS_PATH,
    PUBLISH_USERS_PATH,
)
from pushnotifications.errors import InvalidResponseBody, NetworkError, RemoteRejected
from pushnotifications.models import ClientConfig, ErrorResponse, PublishResponse

logger = logging.getLogger(__name__)


def build_headers(config: ClientConfig) -> Dict[str, str]:
    """Headers sent with every request."""
    return {
        "Authorization": f"Bearer {config.secret_key}",
        "Content-Type": "application/json",
        LIBRARY_HEADER: f"{LIBRARY_NAME} {__version__}",
    }


def publish_interests_url(config: ClientConfig) -> str:
    return config.base_url + PUBLISH_INTERESTS_PATH.format(instance_id=config.instance_id)


def publish_users_url(config: ClientConfig) -> str:
    return config.base_url + PUBLISH_USERS_PATH.format(instance_id=config.instance_id)


def delete_user_url(config: ClientConfig, user_id: str) -> str:
    return config.base_url + DELETE_USER_PATH.format(
        instance_id=config.instance_id,
        user_id=quote(user_id, safe=""),
    )


def network_error(exc: httpx.HTTPError, action: str) -> NetworkError:
    """
    Wrap an httpx failure for the given action ("publish notifications",
    "delete user"). The caller raises it ``from exc``.
    """
    if isinstance(exc, httpx.TimeoutException):
        message = f"Failed to {action}: request timed out"
    else:
        message = f"Failed to {action} due to a network error: {exc}"

    logger.error(
        message,
        extra={
            "error_type": type(exc).__name__,
            "url": str(exc.request.url) if _has_request(exc) else None,
        }
    )
    return NetworkError(message)


def _has_request(exc: httpx.HTTPError) -> bool:
    # httpx raises RuntimeError from .request when it was never set
    try:
        exc.request
    except RuntimeError:
        return False
    return True


def _rejected(response: httpx.Response, action: str) -> RemoteRejected:
    try:
        error_body = ErrorResponse.model_validate_json(response.content)
    except PydanticValidationError as e:
        raise InvalidResponseBody(
            f"Failed to read {action} response due to invalid JSON "
            f"(HTTP {response.status_code})"
        ) from e

    logger.warning(
        "Beams API rejected request",
        extra={
            "status_code": response.status_code,
            "error": error_body.error,
            "description": error_body.description,
        }
    )

    return RemoteRejected(
        f"Failed to {action}: {error_body.error}: {error_body.description}",
        status_code=response.status_code,
        error=error_body.error,
        description=error_body.description,
    )


def classify_publish_response(response: httpx.Response) -> str:
    """
    Interpret a publish response.

    Returns:
        The publish id of an accepted publish

    Raises:
        InvalidResponseBody: Body is not the expected JSON
        RemoteRejected: Service returned an error response
    """
    if response.status_code == httpx.codes.OK:
        try:
            return PublishResponse.model_validate_json(response.content).publish_id
        except PydanticValidationError as e:
            raise InvalidResponseBody(
                "Failed to read publish notification response due to invalid JSON"
            ) from e

    raise _rejected(response, "publish notification")


def classify_delete_user_response(response: httpx.Response) -> None:
    """
    Interpret a delete user response. Any 200 is success; the body is ignored.

    Raises:
        InvalidResponseBody: Error body is not the expected JSON
        RemoteRejected: Service returned an error response
    """
    if response.status_code == httpx.codes.OK:
        return None

    raise _rejected(response, "delete user")
