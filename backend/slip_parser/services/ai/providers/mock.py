"""Mock provider: deterministic responses for tests and fallback."""

from __future__ import annotations

import time
from typing import Optional

from .base import BaseProvider, ProviderResult

MOCK_REPLY = '{"transactionId": null, "toAccountNumber": null, "confidenceScore": 0, "rawText": null}'


class MockProvider(BaseProvider):
    name = "mock"

    def __init__(self, reply: str = MOCK_REPLY) -> None:
        self._reply = reply

    async def generate(
        self,
        prompt: str,
        *,
        image_url: str,
        model: str = "",
        timeout_seconds: Optional[float] = None,
    ) -> ProviderResult:
        t0 = time.monotonic()
        text = self._reply
        elapsed = (time.monotonic() - t0) * 1000
        return ProviderResult(
            raw_text=text,
            model=model or "mock-v1",
            provider=self.name,
            input_tokens=len(prompt.split()),
            output_tokens=len(text.split()),
            latency_ms=round(elapsed, 2),
        )
