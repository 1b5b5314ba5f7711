"""Client configuration using Pydantic Settings"""
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import ValidationError as PydanticValidationError, field_validator
from typing import Optional

from pushnotifications.errors import InvalidConfiguration


class Settings(BaseSettings):
    """Push notifications settings loaded from environment variables"""

    # Beams credentials
    BEAMS_INSTANCE_ID: Optional[str] = None
    BEAMS_SECRET_KEY: Optional[str] = None

    # Transport
    BEAMS_BASE_URL: Optional[str] = None  # May contain {instance_id}
    BEAMS_REQUEST_TIMEOUT_SECONDS: float = 60.0

    # Logging; unknown level names fall back to INFO in setup_logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True  # Set to False for human-readable console output

    @field_validator('BEAMS_REQUEST_TIMEOUT_SECONDS', mode='after')
    @classmethod
    def validate_request_timeout(cls, v: float) -> float:
        """Validate the request timeout is positive."""
        if v <= 0:
            raise ValueError("BEAMS_REQUEST_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator('LOG_LEVEL', mode='after')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @property
    def beams_ready(self) -> bool:
        """Check if Beams credentials are configured."""
        return bool(
            self.BEAMS_INSTANCE_ID
            and self.BEAMS_INSTANCE_ID.strip()
            and self.BEAMS_SECRET_KEY
            and self.BEAMS_SECRET_KEY.strip()
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


def load_settings(**overrides) -> Settings:
    """
    Read settings from the environment and .env.

    Raises:
        InvalidConfiguration: A variable is set to an unusable value
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfiguration(f"Invalid environment settings ({problems})") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process, on first use rather than at import."""
    return load_settings()
