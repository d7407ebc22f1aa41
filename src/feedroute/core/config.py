"""feedroute configuration.

Application settings loaded from environment variables with FEEDROUTE_ prefix.

Example:
    >>> from feedroute.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.cache_enabled
    True
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with FEEDROUTE_ prefix.

    Example:
        >>> from feedroute.core.config import Settings
        >>> s = Settings(cache_ttl=60)
        >>> s.cache_ttl
        60
        >>> s.default_limit
        10
    """

    model_config = SettingsConfigDict(
        env_prefix="FEEDROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP
    request_timeout: float = Field(default=30.0, ge=1.0, description="Per-request timeout in seconds")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="Default User-Agent header")

    # Cache
    cache_enabled: bool = Field(default=True, description="Memoize detail pages by link")
    cache_ttl: int = Field(default=3600, ge=0, description="Detail cache lifetime in seconds (0 = no expiry)")

    # Extraction
    default_limit: int = Field(default=10, ge=1, le=200, description="Default max items per listing")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from feedroute.core.config import get_settings
        >>> s = get_settings(request_timeout=5.0)
        >>> s.request_timeout
        5.0
    """
    return Settings(**overrides)
