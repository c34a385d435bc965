"""Google Gemini adapter built on the google-genai SDK."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from backend.core import get_logger
from backend.providers.base import (
    BaseStreamAdapter,
    ChatMessage,
    ChatRequest,
    ModelEntry,
    ProviderType,
)
from backend.providers.prompts import CHAT_SYSTEM_PROMPT
from backend.providers.protocol import StreamChunk, error_chunk, finish_chunk, text_chunk

logger = get_logger(__name__)

# (api_key, timeout_seconds) -> client exposing ``.aio.models``
ClientFactory = Callable[[str, float], Any]


def create_genai_client(api_key: str, timeout_seconds: float) -> genai.Client:
    """Build a Gemini client whose HTTP calls share the request deadline."""
    return genai.Client(
        api_key=api_key,
        http_options=genai_types.HttpOptions(timeout=int(timeout_seconds * 1000)),
    )


def build_contents(
    messages: tuple[ChatMessage, ...], system_prompt: str
) -> list[genai_types.Content]:
    """
    Convert chat history into Gemini contents.

    Gemini only knows ``user`` and ``model`` turns and has no system slot in
    the conversation, so the system instruction (plus any system-role
    messages) is prepended to the first user message.
    """
    instructions = [system_prompt]
    instructions.extend(msg.content for msg in messages if msg.role == "system")
    instruction = "\n\n".join(instructions)

    contents: list[genai_types.Content] = []
    system_added = False
    for msg in messages:
        if msg.role == "system":
            continue
        role = "model" if msg.role == "assistant" else msg.role
        text = msg.content
        if not system_added and msg.role == "user":
            text = f"{instruction}\n\nUser: {msg.content}"
            system_added = True
        contents.append(genai_types.Content(role=role, parts=[genai_types.Part(text=text)]))
    return contents


class GoogleStreamAdapter(BaseStreamAdapter):
    """Adapter for Gemini models through the native streaming SDK call."""

    provider_type = ProviderType.GOOGLE

    def __init__(
        self,
        timeout: float,
        client_factory: ClientFactory = create_genai_client,
    ):
        super().__init__(timeout_seconds=timeout)
        self.display_name = "Google"
        self.client_factory = client_factory

    async def chat_stream(
        self, request: ChatRequest, entry: ModelEntry, api_key: str
    ) -> AsyncIterator[StreamChunk]:
        try:
            client = self.client_factory(api_key, self.timeout_seconds)
        except Exception as exc:
            yield error_chunk(f"Failed to create AI client: {exc}")
            return

        contents = build_contents(request.messages, CHAT_SYSTEM_PROMPT)
        try:
            stream = await client.aio.models.generate_content_stream(
                model=entry.model_id,
                contents=contents,
            )
            async for response in stream:
                for candidate in response.candidates or []:
                    parts = candidate.content.parts if candidate.content else None
                    for part in parts or []:
                        if part.text:
                            yield text_chunk(part.text)
        except genai_errors.APIError as exc:
            logger.warning(
                "Gemini stream failed",
                data={"model": entry.model_id, "code": exc.code, "status": exc.status},
            )
            # No terminal chunk after an in-band error
            yield error_chunk(str(exc))
            return
        except Exception as exc:
            logger.warning(
                "Gemini stream interrupted",
                data={"model": entry.model_id, "error": str(exc)},
            )
            yield error_chunk(f"Streaming error: {exc}")
            return
        finally:
            await client.aio.aclose()

        yield finish_chunk()
