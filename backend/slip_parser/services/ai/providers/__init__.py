"""Provider factory: returns the configured provider instance."""

from __future__ import annotations

import logging

from fastapi import Depends

from slip_parser.core.config import Settings, get_settings
from slip_parser.core.errors import UpstreamInvocationError

from .base import BaseProvider, ProviderResult
from .mock import MockProvider

logger = logging.getLogger(__name__)

__all__ = ["get_provider", "get_slip_provider", "BaseProvider", "ProviderResult", "MockProvider"]


def get_provider(provider_name: str, settings: Settings) -> BaseProvider:
    """Return a provider instance for *provider_name*.

    ``MockProvider`` is only used when asked for by name. A missing API key
    or an unknown provider name raises ``UpstreamInvocationError`` so a
    misconfigured server never answers with a fake empty slip.
    """
    name = provider_name.lower().strip()

    if name == "mock":
        return MockProvider()

    if name == "openai":
        if not settings.openai_api_key:
            logger.error("provider.not_configured", extra={"provider": name, "reason": "OPENAI_API_KEY not set"})
            raise UpstreamInvocationError("OPENAI_API_KEY not set")
        from .openai import OpenAIProvider

        return OpenAIProvider(api_key=settings.openai_api_key, base_url=settings.openai_base_url)

    logger.error("provider.not_configured", extra={"provider": name, "reason": "unknown provider"})
    raise UpstreamInvocationError(f"unknown provider {name!r}")


def get_slip_provider(settings: Settings = Depends(get_settings)) -> BaseProvider:
    """FastAPI dependency: the provider configured for slip extraction."""
    return get_provider(settings.ai_provider, settings)
