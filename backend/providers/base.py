"""
Base stream adapter interface.

Defines the contract that every provider adapter implements and the
deadline handling shared by all of them.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum

from backend.core.logging import get_logger
from backend.providers.protocol import ChunkType, StreamChunk, error_chunk

logger = get_logger(__name__)


class ProviderType(str, Enum):
    """Supported provider families."""

    GOOGLE = "google"
    OPENAI = "openai"
    OPENROUTER = "openrouter"


@dataclass(frozen=True)
class ModelEntry:
    """Static description of a supported model."""

    name: str
    model_id: str
    provider: ProviderType
    credential_header: str


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message."""

    role: str  # "system", "user", "assistant"
    content: str


@dataclass(frozen=True)
class ChatRequest:
    """Validated chat request handed to an adapter."""

    messages: tuple[ChatMessage, ...]
    model: str


class BaseStreamAdapter(ABC):
    """
    Abstract base class for provider stream adapters.

    Subclasses translate one provider's native stream into unified
    protocol chunks by implementing ``chat_stream``. Callers consume
    ``stream_to``, which frames each chunk as a protocol line and bounds
    the whole upstream interaction by a wall-clock deadline.
    """

    provider_type: ProviderType
    display_name: str

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds

    async def aclose(self) -> None:
        """Close any underlying resources (optional)."""
        return None

    @abstractmethod
    def chat_stream(
        self, request: ChatRequest, entry: ModelEntry, api_key: str
    ) -> AsyncIterator[StreamChunk]:
        """
        Stream unified chunks for a chat request.

        Args:
            request: Validated chat request
            entry: Registry entry of the requested model
            api_key: Resolved provider credential

        Yields:
            StreamChunk objects in emission order. Upstream failures are
            reported as an error chunk rather than raised.
        """
        ...

    async def stream_to(
        self, request: ChatRequest, entry: ModelEntry, api_key: str
    ) -> AsyncIterator[str]:
        """Yield encoded protocol lines until a terminal or error chunk."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout_seconds
        chunks = self.chat_stream(request, entry, api_key)
        try:
            while True:
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise TimeoutError
                try:
                    chunk = await asyncio.wait_for(chunks.__anext__(), timeout=remaining)
                except StopAsyncIteration:
                    break
                yield chunk.encode()
                if chunk.type is not ChunkType.TEXT:
                    break
        except TimeoutError:
            logger.warning(
                "Upstream deadline exceeded",
                data={"provider": self.provider_type.value, "timeout": self.timeout_seconds},
            )
            yield error_chunk(
                f"upstream deadline exceeded after {self.timeout_seconds:g}s"
            ).encode()
        except Exception as exc:
            logger.exception(
                "Unexpected error during chat stream",
                exc_info=exc,
                data={"provider": self.provider_type.value, "model": entry.model_id},
            )
            yield error_chunk(str(exc) or exc.__class__.__name__).encode()
        finally:
            await chunks.aclose()
