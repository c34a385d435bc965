"""Single-shot conversation title generation with Gemini."""

from __future__ import annotations

import asyncio

from google.genai import types as genai_types

from backend.core import TitleGenerationError, get_logger
from backend.providers.google import ClientFactory, create_genai_client
from backend.providers.prompts import TITLE_SYSTEM_PROMPT

logger = get_logger(__name__)


class TitleGenerator:
    """Summarize a conversation's opening message into a short title."""

    def __init__(
        self,
        model: str,
        timeout: float,
        client_factory: ClientFactory = create_genai_client,
    ):
        self.model = model
        self.timeout = timeout
        self.client_factory = client_factory

    async def generate_title(self, prompt: str, api_key: str) -> str:
        """
        Generate a title for ``prompt``.

        Raises:
            TitleGenerationError: If the call fails, times out, or the
                response carries no usable text
        """
        try:
            client = self.client_factory(api_key, self.timeout)
        except Exception as exc:
            raise TitleGenerationError(f"failed to create gemini client: {exc}") from exc

        # The system instruction travels inside the single user turn
        full_prompt = f"{TITLE_SYSTEM_PROMPT}\n\nUser message: {prompt}"
        contents = [
            genai_types.Content(role="user", parts=[genai_types.Part(text=full_prompt)])
        ]

        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(model=self.model, contents=contents),
                timeout=self.timeout,
            )
        except TimeoutError as exc:
            raise TitleGenerationError(
                f"title generation timed out after {self.timeout:g}s"
            ) from exc
        except Exception as exc:
            raise TitleGenerationError(f"failed to generate content: {exc}") from exc
        finally:
            await client.aio.aclose()

        candidates = response.candidates or []
        content = candidates[0].content if candidates else None
        if content is None or not content.parts:
            raise TitleGenerationError("no response generated")

        title = (content.parts[0].text or "").strip()
        if not title:
            raise TitleGenerationError("unexpected response format")

        logger.info("Title generated", data={"model": self.model, "length": len(title)})
        return title
