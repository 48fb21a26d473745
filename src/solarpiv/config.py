"""Runtime settings read from the environment (populated from .env by entry points)."""

import os
from dataclasses import dataclass

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


@dataclass(frozen=True)
class Settings:
    geocoder_url: str = NOMINATIM_URL
    user_agent: str = "solarpiv/0.1"
    http_timeout: float = 10.0  # Seconds
    log_level: str = "WARNING"


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_settings() -> Settings:
    """Build Settings from SOLARPIV_* environment variables, falling back to defaults.

    An unknown SOLARPIV_LOG_LEVEL falls back to the default level.
    """
    defaults = Settings()
    log_level = os.environ.get("SOLARPIV_LOG_LEVEL", defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        log_level = defaults.log_level
    return Settings(
        geocoder_url=os.environ.get("SOLARPIV_GEOCODER_URL", defaults.geocoder_url),
        user_agent=os.environ.get("SOLARPIV_USER_AGENT", defaults.user_agent),
        http_timeout=float(os.environ.get("SOLARPIV_HTTP_TIMEOUT", defaults.http_timeout)),
        log_level=log_level,
    )
