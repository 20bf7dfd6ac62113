from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.api.app import app
from backend.providers.deps import ProviderSettings, get_http_client, get_settings

GEOCODER_URL = "https://geocoder.test/search"
WEATHER_URL = "https://weather.test/v1/archive"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> ProviderSettings:
    return ProviderSettings(geocoder_url=GEOCODER_URL, weather_archive_url=WEATHER_URL, user_agent="tests/1.0")


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every request it served."""

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def api(settings):
    """Build a TestClient whose upstream calls go to ``handler``."""

    def build(handler: Handler) -> tuple[TestClient, RecordingTransport]:
        transport = RecordingTransport(handler)

        async def override_client():
            async with httpx.AsyncClient(transport=transport) as client:
                yield client

        app.dependency_overrides[get_http_client] = override_client
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app), transport

    yield build
    app.dependency_overrides.clear()
