"""
Pydantic models for client configuration and API responses.
"""

from datetime import timedelta
from typing import Optional, Union

import httpx
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError as PydanticValidationError,
    field_validator,
    model_validator,
)

from pushnotifications.constants import (
    DEFAULT_BASE_URL_TEMPLATE,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    INSTANCE_ID_PLACEHOLDER,
    PUBLISH_INTERESTS_PATH,
)
from pushnotifications.errors import InvalidConfiguration


Timeout = Union[int, float, timedelta]


class ClientConfig(BaseModel):
    """Immutable configuration of a push notifications client.

    Attributes:
        instance_id: Beams instance the client publishes to
        secret_key: Instance secret, used as bearer credential and token signing key
        base_url: Fully resolved API base URL (no trailing slash)
        request_timeout: Deadline in seconds applied to each HTTP request
    """

    model_config = ConfigDict(frozen=True)

    instance_id: str = Field(..., description="Beams instance ID")
    secret_key: str = Field(..., repr=False, description="Beams instance secret key")
    base_url: str = Field(..., description="API base URL")
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Per-request timeout in seconds",
    )

    @field_validator("instance_id", "secret_key")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject empty or whitespace-only credentials."""
        if not v or not v.strip():
            raise ValueError("cannot be an empty string")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("must be an http:// or https:// URL")
        return v

    @model_validator(mode="after")
    def validate_endpoint_url(self) -> "ClientConfig":
        """Check httpx can parse the URLs built from base_url and instance_id."""
        try:
            httpx.URL(self.base_url + PUBLISH_INTERESTS_PATH.format(instance_id=self.instance_id))
        except httpx.InvalidURL as e:
            raise ValueError(f"base URL or instance id does not form a valid URL: {e}") from e
        return self

    @classmethod
    def build(
        cls,
        instance_id: str,
        secret_key: str,
        request_timeout: Optional[Timeout] = None,
        base_url: Optional[str] = None,
    ) -> "ClientConfig":
        """
        Build a configuration from credentials and optional overrides.

        Defaults are applied first, then request_timeout, then base_url.
        A base_url may contain the ``{instance_id}`` placeholder.

        Raises:
            InvalidConfiguration: If a credential is empty or an override is invalid
        """
        if not isinstance(instance_id, str) or not instance_id.strip():
            raise InvalidConfiguration("Instance Id cannot be an empty string")
        if not isinstance(secret_key, str) or not secret_key.strip():
            raise InvalidConfiguration("Secret Key cannot be an empty string")

        fields = {
            "instance_id": instance_id,
            "secret_key": secret_key,
            "base_url": DEFAULT_BASE_URL_TEMPLATE,
            "request_timeout": DEFAULT_REQUEST_TIMEOUT_SECONDS,
        }

        if request_timeout is not None:
            if isinstance(request_timeout, timedelta):
                request_timeout = request_timeout.total_seconds()
            fields["request_timeout"] = request_timeout

        if base_url is not None:
            if not isinstance(base_url, str):
                raise InvalidConfiguration("Base URL must be a string")
            fields["base_url"] = base_url

        fields["base_url"] = fields["base_url"].replace(INSTANCE_ID_PLACEHOLDER, instance_id)

        try:
            return cls(**fields)
        except PydanticValidationError as e:
            # Never echo the secret key back in the message
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidConfiguration(f"Invalid client configuration ({problems})") from e


class PublishResponse(BaseModel):
    """Successful publish response body."""

    publish_id: str = Field(..., alias="publishId", min_length=1)


class ErrorResponse(BaseModel):
    """Error response body returned with any non-200 status."""

    error: str = ""
    description: str = ""
