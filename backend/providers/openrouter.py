"""OpenRouter adapter over the OpenAI-style chat-completions SSE stream."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from backend.core import get_logger
from backend.providers.base import BaseStreamAdapter, ChatRequest, ModelEntry, ProviderType
from backend.providers.http_client import create_http_client, read_error_body, with_request_id
from backend.providers.prompts import CHAT_SYSTEM_PROMPT
from backend.providers.protocol import StreamChunk, error_chunk, finish_chunk, text_chunk

logger = get_logger(__name__)

SSE_DATA_PREFIX = "data: "
SSE_DONE = "[DONE]"


class OpenRouterStreamAdapter(BaseStreamAdapter):
    """Adapter for OpenRouter's server-sent-events chat stream."""

    provider_type = ProviderType.OPENROUTER

    def __init__(
        self,
        base_url: str,
        timeout: float,
        referer: str,
        title: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(timeout_seconds=timeout)
        self.display_name = "OpenRouter"
        self.referer = referer
        self.title = title
        self.client = create_http_client(
            base_url=base_url,
            timeout_seconds=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    def _headers(self, api_key: str) -> dict[str, str]:
        return with_request_id(
            {
                "Content-Type": "application/json",
                "Authorization": f"Bearer {api_key}",
                "HTTP-Referer": self.referer,
                "X-Title": self.title,
            }
        )

    async def chat_stream(
        self, request: ChatRequest, entry: ModelEntry, api_key: str
    ) -> AsyncIterator[StreamChunk]:
        payload = {
            "model": entry.model_id,
            "messages": _format_messages(request),
            "stream": True,
        }

        connected = False
        try:
            async with self.client.stream(
                "POST",
                "/chat/completions",
                json=payload,
                headers=self._headers(api_key),
            ) as response:
                connected = True
                if response.status_code != 200:
                    body = await read_error_body(response)
                    logger.warning(
                        "OpenRouter returned an error status",
                        data={"status": response.status_code, "model": entry.model_id},
                    )
                    yield error_chunk(f"OpenRouter API error {response.status_code}: {body}")
                    return

                async for line in response.aiter_lines():
                    if not line.startswith(SSE_DATA_PREFIX):
                        continue
                    data = line[len(SSE_DATA_PREFIX):]
                    if data == SSE_DONE:
                        yield finish_chunk()
                        return

                    content = _delta_content(data)
                    if content:
                        yield text_chunk(content)
        except httpx.HTTPError as exc:
            if not connected:
                yield error_chunk(f"Failed to connect to OpenRouter: {exc}")
            else:
                yield error_chunk(f"Streaming error: {exc}")


def _format_messages(request: ChatRequest) -> list[dict[str, str]]:
    """Prepend the system instruction to the conversation history."""
    messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    messages.extend({"role": msg.role, "content": msg.content} for msg in request.messages)
    return messages


def _delta_content(data: str) -> str:
    """Extract ``choices[0].delta.content`` from an SSE payload.

    Malformed or unexpected payloads yield an empty string; providers emit
    keep-alive and partial lines that are not worth failing the stream over.
    """
    try:
        chunk: Any = json.loads(data)
    except json.JSONDecodeError:
        return ""
    if not isinstance(chunk, dict):
        return ""
    choices = chunk.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    choice = choices[0]
    if not isinstance(choice, dict):
        return ""
    delta = choice.get("delta")
    if not isinstance(delta, dict):
        return ""
    content = delta.get("content")
    return content if isinstance(content, str) else ""
