"""OpenAI provider (Responses API, text + image input)."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from .base import BaseProvider, ProviderResult

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _output_text(data: dict[str, Any]) -> str:
    """Concatenate every ``output_text`` part of a Responses API payload."""
    if isinstance(data.get("output_text"), str):
        return data["output_text"]

    parts: list[str] = []
    for item in data.get("output") or []:
        if item.get("type") != "message":
            continue
        for content in item.get("content") or []:
            if content.get("type") == "output_text":
                parts.append(content.get("text", ""))
    return "".join(parts)


class OpenAIProvider(BaseProvider):
    name = "openai"

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    async def generate(
        self,
        prompt: str,
        *,
        image_url: str,
        model: str = "",
        timeout_seconds: Optional[float] = None,
    ) -> ProviderResult:
        model = model or "gpt-4.1-mini"
        t0 = time.monotonic()

        async with httpx.AsyncClient(timeout=timeout_seconds, transport=self._transport) as client:
            resp = await client.post(
                f"{self._base_url}/responses",
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": model,
                    "input": [
                        {
                            "role": "user",
                            "content": [
                                {"type": "input_text", "text": prompt},
                                {"type": "input_image", "image_url": image_url},
                            ],
                        }
                    ],
                },
            )
            resp.raise_for_status()
            data = resp.json()

        elapsed = (time.monotonic() - t0) * 1000
        usage = data.get("usage") or {}

        return ProviderResult(
            raw_text=_output_text(data),
            model=data.get("model") or model,
            provider=self.name,
            input_tokens=usage.get("input_tokens") or 0,
            output_tokens=usage.get("output_tokens") or 0,
            latency_ms=round(elapsed, 2),
        )
