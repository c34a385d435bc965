"""Deterministic mock adapter for providers without a live integration."""

import asyncio
from collections.abc import AsyncIterator

from backend.providers.base import BaseStreamAdapter, ChatRequest, ModelEntry, ProviderType
from backend.providers.protocol import StreamChunk, finish_chunk, text_chunk

MOCK_TOKENS = ("Mock ", "streaming ", "response ", "to ", "your ", "message ")


class MockStreamAdapter(BaseStreamAdapter):
    """Emit a canned token sequence followed by an echo of the last message."""

    provider_type = ProviderType.OPENAI

    def __init__(self, timeout: float, chunk_delay: float = 0.2):
        super().__init__(timeout_seconds=timeout)
        self.display_name = "Mock"
        self.chunk_delay = chunk_delay

    async def chat_stream(
        self, request: ChatRequest, entry: ModelEntry, api_key: str
    ) -> AsyncIterator[StreamChunk]:
        tokens = [*MOCK_TOKENS, request.messages[-1].content]
        for token in tokens:
            yield text_chunk(token)
            if self.chunk_delay:
                await asyncio.sleep(self.chunk_delay)
        yield finish_chunk()
