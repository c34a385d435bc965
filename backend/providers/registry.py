"""Adapter registry: one stream adapter per provider family."""

from __future__ import annotations

import httpx

from backend.config import Settings
from backend.core import get_logger
from backend.providers.base import BaseStreamAdapter, ProviderType
from backend.providers.google import ClientFactory, GoogleStreamAdapter, create_genai_client
from backend.providers.mock import MockStreamAdapter
from backend.providers.openrouter import OpenRouterStreamAdapter

logger = get_logger(__name__)


class AdapterRegistry:
    """Instantiate adapters once at startup and select them by provider."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        genai_client_factory: ClientFactory = create_genai_client,
    ):
        self.settings = settings
        self.mock = MockStreamAdapter(
            timeout=settings.chat_timeout_seconds,
            chunk_delay=settings.mock_chunk_delay_seconds,
        )
        self.adapters: dict[ProviderType, BaseStreamAdapter] = {
            ProviderType.GOOGLE: GoogleStreamAdapter(
                timeout=settings.chat_timeout_seconds,
                client_factory=genai_client_factory,
            ),
            ProviderType.OPENROUTER: OpenRouterStreamAdapter(
                base_url=settings.openrouter_base_url,
                timeout=settings.chat_timeout_seconds,
                referer=settings.openrouter_referer,
                title=settings.openrouter_title,
                transport=transport,
            ),
        }
        logger.info(
            "Adapter registry initialized",
            data={
                "live": [provider.value for provider in self.adapters],
                "mocked": [p.value for p in ProviderType if p not in self.adapters],
            },
        )

    def get(self, provider: ProviderType) -> BaseStreamAdapter:
        """Return the live adapter for a provider, or the mock fallback."""
        return self.adapters.get(provider, self.mock)

    async def aclose(self) -> None:
        """Close all adapter clients."""
        for adapter in self.adapters.values():
            await adapter.aclose()
