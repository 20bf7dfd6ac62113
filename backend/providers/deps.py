"""Upstream provider dependencies for FastAPI routes."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from functools import lru_cache
import os

import httpx

GEOCODER_URL_ENV_VAR = "CABIN_GEOCODER_URL"
WEATHER_URL_ENV_VAR = "CABIN_WEATHER_ARCHIVE_URL"
USER_AGENT_ENV_VAR = "CABIN_GEOCODER_USER_AGENT"
COUNTRY_CODES_ENV_VAR = "CABIN_COUNTRY_CODES"
TIMEOUT_ENV_VAR = "CABIN_HTTP_TIMEOUT"

DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_WEATHER_URL = "https://archive-api.open-meteo.com/v1/archive"
DEFAULT_USER_AGENT = "shs-savings-calc/1.0 (contact: support@shs.example)"
DEFAULT_COUNTRY_CODES = "no,se,dk,fi"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderSettings:
    geocoder_url: str = DEFAULT_GEOCODER_URL
    weather_archive_url: str = DEFAULT_WEATHER_URL
    user_agent: str = DEFAULT_USER_AGENT
    country_codes: str = DEFAULT_COUNTRY_CODES
    timeout: float = DEFAULT_TIMEOUT


@lru_cache(maxsize=1)
def get_settings() -> ProviderSettings:
    """Resolve provider endpoints from env overrides with public defaults."""
    timeout_value = os.environ.get(TIMEOUT_ENV_VAR)
    try:
        timeout = float(timeout_value) if timeout_value else DEFAULT_TIMEOUT
    except ValueError:
        timeout = DEFAULT_TIMEOUT

    return ProviderSettings(
        geocoder_url=os.environ.get(GEOCODER_URL_ENV_VAR) or DEFAULT_GEOCODER_URL,
        weather_archive_url=os.environ.get(WEATHER_URL_ENV_VAR) or DEFAULT_WEATHER_URL,
        user_agent=os.environ.get(USER_AGENT_ENV_VAR) or DEFAULT_USER_AGENT,
        country_codes=os.environ.get(COUNTRY_CODES_ENV_VAR) or DEFAULT_COUNTRY_CODES,
        timeout=timeout,
    )


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an HTTP client for the duration of a request."""
    settings = get_settings()
    client = httpx.AsyncClient(timeout=settings.timeout, follow_redirects=True)
    try:
        yield client
    finally:
        await client.aclose()
