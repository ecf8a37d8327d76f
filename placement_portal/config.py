"""Configuration management for the portal client.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from placement_portal.core.logging import logger
from placement_portal.core.retry_config import RetryConfig

DEFAULT_API_BASE_URL = "http://localhost:8080/api"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_BACKOFF_MS = 1000
DEFAULT_REDIRECT_DELAY = 1.5


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


class Config:
    """Application configuration loaded from environment variables."""

    # Backend API
    @staticmethod
    def api_base_url() -> str:
        """Get backend API base URL from environment."""
        return os.getenv("PORTAL_API_URL") or DEFAULT_API_BASE_URL

    @staticmethod
    def app_env() -> str:
        """Get deployment mode (development, staging, production)."""
        return os.getenv("PORTAL_APP_ENV") or "development"

    # Request lifecycle
    @staticmethod
    def request_timeout() -> float:
        """Get request timeout in seconds."""
        return _env_float("PORTAL_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)

    @staticmethod
    def max_retries() -> int:
        """Get maximum retries after the initial attempt."""
        return int(_env_float("PORTAL_MAX_RETRIES", DEFAULT_MAX_RETRIES))

    @staticmethod
    def base_backoff_ms() -> float:
        """Get base backoff delay in milliseconds."""
        return _env_float("PORTAL_BASE_BACKOFF_MS", DEFAULT_BASE_BACKOFF_MS)

    # Session persistence
    @staticmethod
    def session_file() -> Optional[str]:
        """Get path of the JSON file holding the persisted session."""
        return os.getenv("PORTAL_SESSION_FILE")

    # Helper methods
    @staticmethod
    def is_production() -> bool:
        """Check if running in a production deployment."""
        return Config.app_env().lower() == "production"

    @staticmethod
    def is_api_configured() -> bool:
        """Check if the API URL was set to something other than the local default."""
        return Config.api_base_url() != DEFAULT_API_BASE_URL

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not os.getenv("PORTAL_API_URL"):
            missing.append("PORTAL_API_URL")
        return missing


# Singleton instance for easy access
config = Config()


def secure_base_url(base_url: str, app_env: str) -> str:
    """Upgrade a plain-HTTP base URL to HTTPS in production deployments."""
    if app_env.lower() == "production" and base_url.startswith("http://"):
        upgraded = "https://" + base_url[len("http://"):]
        logger.warning("insecure_api_url_upgraded", original=base_url, upgraded=upgraded)
        return upgraded
    return base_url


@dataclass(frozen=True)
class ClientConfig:
    """Settings injected into a PortalClient."""

    base_url: str = DEFAULT_API_BASE_URL
    app_env: str = "development"
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    retry: RetryConfig = field(default_factory=RetryConfig)
    redirect_delay: float = DEFAULT_REDIRECT_DELAY
    login_path: str = "/login"
    dashboard_path: str = "/dashboard"
    session_file: Optional[str] = None

    @property
    def resolved_base_url(self) -> str:
        return secure_base_url(self.base_url, self.app_env)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build client settings from environment variables."""
        return cls(
            base_url=config.api_base_url(),
            app_env=config.app_env(),
            timeout=config.request_timeout(),
            retry=RetryConfig(
                max_retries=config.max_retries(),
                initial_delay=config.base_backoff_ms() / 1000.0,
            ),
            session_file=config.session_file(),
        )
