"""
Client settings and configuration management.
Values come from environment variables (``GOLF_GENIUS_*``) or a ``.env`` file.
"""
import threading
from typing import Any, Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable configuration snapshot shared by every call."""

    model_config = SettingsConfigDict(
        env_prefix="GOLF_GENIUS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Golf Genius API settings
    api_key: Optional[str] = None
    base_url: str = "https://www.golfgenius.com"
    api_version_prefix: str = "/api_v2"

    # Transport settings
    open_timeout: float = 30.0
    read_timeout: float = 80.0
    max_retries: int = 3
    retry_interval: float = 0.5
    backoff_factor: float = 2.0

    # User Agent for API requests
    user_agent: str = "golf-genius-python/0.1.0"

    # Listing defaults
    default_page_size: int = 25
    max_fetch_pages: int = 20

    # Logging settings
    log_level: str = "WARNING"

    @property
    def api_base(self) -> str:
        """Base URL including the API version prefix."""
        return f"{self.base_url.rstrip('/')}{self.api_version_prefix}"

    def redacted(self) -> Dict[str, Any]:
        """Settings as a dictionary with the API key hidden."""
        data = self.model_dump()
        if data.get("api_key"):
            data["api_key"] = "[REDACTED]"
        return data


_settings_lock = threading.Lock()
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings snapshot, creating it on first use."""
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = Settings()
    return _settings


def configure(**overrides: Any) -> Settings:
    """Replace the process-wide snapshot with one carrying ``overrides``."""
    global _settings
    with _settings_lock:
        current = _settings if _settings is not None else Settings()
        _settings = Settings(**{**current.model_dump(), **overrides})
        return _settings


def reset_settings() -> Settings:
    """Discard overrides and reload settings from the environment."""
    global _settings
    with _settings_lock:
        _settings = Settings()
        return _settings
