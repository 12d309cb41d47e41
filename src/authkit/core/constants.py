"""
Constants and configuration for AuthKit.
Centralizes remote origins, header names, timeouts and logging values.
Includes Pydantic validation for environment variables.
"""

from __future__ import annotations

import os
import threading

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ============================================================================
# Remote Platform Origins
# ============================================================================

#: Production origin; also the default services origin when no base_url is given
DEFAULT_BASE_URL = "https://api.integrationos.com"

#: Public API origin used when the services origin points at a local stack
LOCAL_API_URL = "http://localhost:3005"

#: Public API origin used when the services origin is a development deployment
DEVELOPMENT_API_URL = "https://development-api.integrationos.com"

#: Public API origin for everything else
PRODUCTION_API_URL = "https://api.integrationos.com"

#: Page size requested from the connection definitions listing
CONNECTION_DEFINITIONS_LIMIT = 100

# ============================================================================
# Credentials
# ============================================================================

#: Substring marking a live secret (drives platform filtering)
LIVE_SECRET_MARKER = "sk_live_"

#: Prefix marking a test secret (drives the environment tag sent upstream)
TEST_SECRET_PREFIX = "sk_test"

#: Header carrying the secret on internal services endpoints
BUILDABLE_SECRET_HEADER = "X-Buildable-Secret"

#: Header carrying the secret on public API endpoints
IOS_SECRET_HEADER = "x-integrationos-secret"

#: Marker sent with every event link so usage is attributed to the SDK
USAGE_SOURCE = "sdk"

# ============================================================================
# Embed Token Configuration
# ============================================================================

#: Lifetime of an issued embed token in milliseconds (5 minutes)
EMBED_TOKEN_TTL_MS = 5 * 60 * 1000

# ============================================================================
# HTTP Client Configuration
# ============================================================================

DEFAULT_CONNECT_TIMEOUT = 10.0  # Time to establish connection
DEFAULT_READ_TIMEOUT = 30.0  # Time to wait for a response body
DEFAULT_WRITE_TIMEOUT = 10.0  # Time to send request
DEFAULT_POOL_TIMEOUT = 10.0  # Time to acquire connection from pool

# ============================================================================
# Logging Configuration
# ============================================================================

#: Logger name shared by every AuthKit module
LOGGER_NAME = "authkit"

#: Maximum size in bytes for the error log file before rotation (10MB).
LOG_MAX_SIZE = 10 * 1024 * 1024

#: Number of error log backups to retain during rotation.
LOG_BACKUP_COUNT_ERRORS = 3

#: Characters of a secret left visible when it is masked in logs
SECRET_VISIBLE_CHARS = 4

# ============================================================================
# Settings
# ============================================================================

#: Valid environment names for configuration loading
Environment = Literal["development", "production", "test"]

#: Directory searched for .env files (current working directory)
_ENV_DIR = Path.cwd()


def _get_env_files() -> list[Path]:
    """Determine which .env files to load based on APP_ENV.

    Load order (later files override earlier - pydantic-settings last-wins):
    1. .env (base defaults) - lowest priority
    2. .env.{environment} (environment-specific overrides)
    3. .env.local (local developer overrides, gitignored) - highest priority

    Returns:
        List of Path objects for env files that exist.
    """
    env_name = os.getenv("APP_ENV", "development").lower()
    if env_name not in ("development", "production", "test"):
        env_name = "development"

    candidates = [
        _ENV_DIR / ".env",
        _ENV_DIR / f".env.{env_name}",
        _ENV_DIR / ".env.local",
    ]
    return [p for p in candidates if p.exists()]


class Settings(BaseSettings):
    """Environment settings for the SDK transport and the optional HTTP service.

    Configuration priority (highest to lowest):
    1. Values passed to Settings() constructor
    2. Environment variables prefixed with AUTHKIT_
    3. .env.local > .env.{APP_ENV} > .env (dotenv files, last wins)

    ``secret`` and ``base_url`` are only read by the bundled FastAPI service;
    the ``AuthKit`` client always takes them as constructor arguments.
    """

    app_env: Environment = Field(default="development", description="Application environment")

    # Debug and logging
    debug: bool = Field(default=False, description="Enable debug logging")
    log_dir: Path | None = Field(default=None, description="Directory for the rotating JSON error log")
    http_request_logging: bool = Field(default=False, description="Enable HTTP request/response logging")

    # HTTP client timeouts
    http_connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, description="Connect timeout (seconds)")
    http_read_timeout: float = Field(default=DEFAULT_READ_TIMEOUT, description="Read timeout (seconds)")

    # Embed token service
    secret: str | None = Field(default=None, description="IntegrationOS secret used by the embed token service")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Services origin used by the embed token service")

    model_config = SettingsConfigDict(
        env_prefix="AUTHKIT_",
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("app_env", mode="before")
    @classmethod
    def validate_app_env(cls, v: str | None) -> str:
        """Validate and normalize APP_ENV value."""
        if v is None:
            return "development"
        normalized = str(v).lower()
        if normalized not in ("development", "production", "test"):
            raise ValueError(f"app_env must be 'development', 'production', or 'test', got '{v}'")
        return normalized

    @field_validator("http_connect_timeout", "http_read_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


# ============================================================================
# Settings Management
# ============================================================================


class _SettingsManager:
    """Thread-safe cached settings holder.

    Uses a class to avoid global statement warnings from linters.
    """

    __slots__ = ("_instance", "_lock")

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.Lock()

    def get(self) -> Settings:
        if self._instance is not None:
            return self._instance

        with self._lock:
            # Double-check after acquiring lock
            if self._instance is None:
                self._instance = Settings()
            return self._instance

    def reload(self) -> Settings:
        with self._lock:
            self._instance = Settings()
            return self._instance

    def clear(self) -> None:
        with self._lock:
            self._instance = None


# Module-level singleton manager
_settings_manager = _SettingsManager()


def get_settings() -> Settings:
    """Get the cached settings instance.

    Returns:
        Validated Settings instance.

    Raises:
        ValueError: If configuration is invalid.
    """
    return _settings_manager.get()


def reload_settings() -> Settings:
    """Force reload settings from the environment."""
    return _settings_manager.reload()


def clear_settings_cache() -> None:
    """Clear cached settings instance.

    Primarily useful for testing to ensure fresh settings on each test.
    """
    _settings_manager.clear()
