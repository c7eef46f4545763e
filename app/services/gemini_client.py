from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from app.core.config import Settings
from app.core.constants import GEMINI_GENERATE_PATH, MSG_RETRIES_EXHAUSTED

logger = logging.getLogger("contact_classifier.gemini")

Sleep = Callable[[float], Awaitable[Any]]


class ClassificationError(RuntimeError):
    pass


def build_payload(prompt: str) -> Dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"responseMimeType": "text/plain"},
    }


class GeminiClient:
    """Calls the Gemini ``generateContent`` endpoint.

    Only HTTP 429 and transport failures are retried. Every other non-2xx
    status is terminal. The delay starts at ``initial_backoff_ms`` and doubles
    after each wait.
    """

    __slots__ = (
        "api_key",
        "model",
        "base_url",
        "timeout",
        "max_attempts",
        "initial_backoff_ms",
        "client",
        "sleep",
    )

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 30.0,
        max_attempts: int = 3,
        initial_backoff_ms: int = 1000,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.initial_backoff_ms = initial_backoff_ms
        self.client = client
        self.sleep = sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> "GeminiClient":
        return cls(
            api_key=settings.gemini_api_key or "",
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.http_timeout,
            max_attempts=settings.gemini_max_attempts,
            initial_backoff_ms=settings.gemini_initial_backoff_ms,
            client=client,
            sleep=sleep,
        )

    @property
    def url(self) -> str:
        return self.base_url + GEMINI_GENERATE_PATH.format(model=self.model)

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any]) -> httpx.Response:
        t0 = time.perf_counter()
        r = await client.post(
            self.url,
            params={"key": self.api_key},
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        duration = round((time.perf_counter() - t0) * 1000, 1)
        logger.info(f"Gemini API response. Status: {r.status_code}, Duration: {duration}ms")
        return r

    async def generate_content(self, prompt: str) -> Dict[str, Any]:
        client = self.client or httpx.AsyncClient(timeout=self.timeout)
        close_client = self.client is None
        try:
            payload = build_payload(prompt)
            delay_ms = self.initial_backoff_ms
            response: Optional[httpx.Response] = None

            for attempt in range(self.max_attempts):
                is_last = attempt == self.max_attempts - 1
                try:
                    response = await self._post(client, payload)
                except httpx.TransportError as exc:
                    if is_last:
                        logger.error(
                            f"Gemini HTTP connection error on final attempt: {type(exc).__name__} - {exc}"
                        )
                        raise
                    logger.warning(
                        f"Gemini fetch error: {type(exc).__name__} - {exc}, retrying in {delay_ms / 1000}s..."
                    )
                    await self.sleep(delay_ms / 1000)
                    delay_ms *= 2
                    continue

                if response.is_success:
                    break
                if response.status_code == 429 and not is_last:
                    logger.warning(f"Gemini rate limit hit, retrying in {delay_ms / 1000}s...")
                    await self.sleep(delay_ms / 1000)
                    delay_ms *= 2
                    continue

                logger.error(f"Gemini API Error Body: {response.text}")
                raise ClassificationError(
                    f"Gemini API failed with status {response.status_code}: {response.text}"
                )

            if response is None or not response.is_success:
                raise ClassificationError(MSG_RETRIES_EXHAUSTED)

            try:
                return response.json()
            except ValueError as exc:
                logger.error(f"Gemini returned invalid JSON. Raw body: {response.text}")
                raise ClassificationError(f"Gemini API returned invalid JSON: {exc}") from exc
        finally:
            if close_client:
                await client.aclose()
