"""Centralized configuration read from environment variables."""

import os
from typing import Optional

DEFAULT_WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    return float(value)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.environment: str = os.getenv("DEPLOYMENT_ENV", "local")
        self.version: str = "1.0.0"

        self.cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "600"))
        self.weather_api_url: str = os.getenv("WEATHER_API_URL", DEFAULT_WEATHER_API_URL)
        # Unset means requests waits indefinitely; the host bounds the request
        self.upstream_timeout_seconds: Optional[float] = _optional_float(
            os.getenv("UPSTREAM_TIMEOUT_SECONDS")
        )


settings = Settings()
