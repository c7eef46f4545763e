from typing import Any, List

import httpx
import pytest
import pytest_asyncio

from app.api.deps import get_contact_service, get_settings
from app.core.config import Settings
from app.main import app
from app.services.contact_service import ContactService
from app.services.gemini_client import GeminiClient


def gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_settings(api_key: str = "test-key") -> Settings:
    return Settings(
        GEMINI_API_KEY=api_key,
        GEMINI_MODEL="gemini-test",
        GEMINI_BASE_URL="https://gemini.test/v1beta",
        GEMINI_MAX_ATTEMPTS=3,
        GEMINI_INITIAL_BACKOFF_MS=1000,
    )


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeUpstream:
    """Replays queued responses (or exceptions) and records every request."""

    def __init__(self):
        self.queue: List[Any] = []
        self.requests: List[httpx.Request] = []
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.queue:
            raise AssertionError("unexpected upstream call")
        item = self.queue.pop(0)
        if isinstance(item, type) and issubclass(item, Exception):
            raise item("boom", request=request)
        return item


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest_asyncio.fixture
async def upstream():
    fake = FakeUpstream()
    yield fake
    await fake.client.aclose()


@pytest.fixture
def gemini(upstream, sleep) -> GeminiClient:
    return GeminiClient.from_settings(make_settings(), client=upstream.client, sleep=sleep)


@pytest_asyncio.fixture
async def api(gemini):
    app.dependency_overrides[get_settings] = lambda: make_settings()
    app.dependency_overrides[get_contact_service] = lambda: ContactService(gemini)
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
