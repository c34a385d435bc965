"""Test doubles for the google-genai client and stream helpers."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

from backend.providers import BaseStreamAdapter, ChatMessage, ChatRequest, ModelEntry
from backend.providers.protocol import StreamChunk, parse_line


def gemini_response(*texts: str | None) -> SimpleNamespace:
    """Build a response object shaped like a GenerateContentResponse."""
    parts = [SimpleNamespace(text=text) for text in texts]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


class FakeGenai:
    """Client factory whose clients serve canned streaming and one-shot replies."""

    def __init__(
        self,
        stream_items: list[Any] | None = None,
        response: Any = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.stream_items = stream_items or []
        self.response = response
        self.error = error
        self.delay = delay
        self.api_keys: list[str] = []
        self.calls: list[dict[str, Any]] = []
        self.closed: list[str] = []

    def __call__(self, api_key: str, timeout_seconds: float) -> SimpleNamespace:
        self.api_keys.append(api_key)

        async def aclose() -> None:
            self.closed.append(api_key)

        return SimpleNamespace(aio=SimpleNamespace(models=self, aclose=aclose))

    async def generate_content_stream(self, *, model: str, contents: list[Any]):
        self.calls.append({"model": model, "contents": contents})
        return self._iterate()

    async def _iterate(self):
        for item in self.stream_items:
            await asyncio.sleep(self.delay)
            if isinstance(item, Exception):
                raise item
            yield item

    async def generate_content(self, *, model: str, contents: list[Any]) -> Any:
        self.calls.append({"model": model, "contents": contents})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


def chat_request(*messages: tuple[str, str], model: str = "Gemini 2.5 Flash") -> ChatRequest:
    return ChatRequest(
        messages=tuple(ChatMessage(role=role, content=content) for role, content in messages),
        model=model,
    )


async def collect(
    adapter: BaseStreamAdapter,
    request: ChatRequest,
    entry: ModelEntry,
    api_key: str = "test-key",
) -> list[StreamChunk]:
    """Run an adapter to completion and decode every emitted line."""
    lines = [line async for line in adapter.stream_to(request, entry, api_key)]
    assert all(line.endswith("\n") and line.count("\n") == 1 for line in lines)
    return [parse_line(line) for line in lines]
