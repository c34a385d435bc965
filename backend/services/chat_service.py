"""Request dispatch for chat streaming and title completion."""

from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from typing import TypeVar

import pydantic

from backend.core import (
    TitleGenerationError,
    UnsupportedModelError,
    ValidationError,
    get_logger,
)
from backend.providers import (
    AdapterRegistry,
    ChatMessage,
    ChatRequest,
    CredentialResolver,
    ProviderType,
    lookup,
)
from backend.services.schemas import (
    ChatRequestBody,
    CompletionRequestBody,
    CompletionResponseBody,
)
from backend.services.title_service import TitleGenerator

logger = get_logger(__name__)

COMPLETION_KEY_MESSAGE = (
    "{subject} API key is required. Provide via {header} header "
    "or {env_var} environment variable."
)

BodyT = TypeVar("BodyT", bound=pydantic.BaseModel)


def parse_body(model: type[BodyT], raw_body: bytes) -> BodyT:
    """Validate a raw JSON body, mapping failures to a 400 ValidationError."""
    try:
        return model.model_validate_json(raw_body)
    except pydantic.ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        summary = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in errors
        )
        raise ValidationError(
            f"invalid request body: {summary}", details={"errors": errors}
        ) from exc


class ChatService:
    """Validate requests, resolve credentials, and hand off to an adapter."""

    def __init__(
        self,
        registry: AdapterRegistry,
        resolver: CredentialResolver,
        title_generator: TitleGenerator,
    ):
        self.registry = registry
        self.resolver = resolver
        self.title_generator = title_generator

    def handle_chat(self, raw_body: bytes, headers: Mapping[str, str]) -> AsyncIterator[str]:
        """
        Prepare a chat stream.

        All client errors are raised here, before any body bytes are sent.

        Returns:
            Async iterator of unified protocol lines

        Raises:
            ValidationError: Malformed body or empty message list
            UnsupportedModelError: Model name not in the registry
            MissingCredentialError: No header and no environment fallback
        """
        body = parse_body(ChatRequestBody, raw_body)
        if not body.messages:
            raise ValidationError("at least one message is required")

        entry = lookup(body.model)
        if entry is None:
            raise UnsupportedModelError(body.model)

        api_key = self.resolver.resolve(entry.provider, headers, subject=body.model)

        request = ChatRequest(
            messages=tuple(ChatMessage(role=m.role, content=m.content) for m in body.messages),
            model=body.model,
        )
        adapter = self.registry.get(entry.provider)
        logger.info(
            "Starting chat stream",
            data={
                "model": entry.model_id,
                "provider": entry.provider.value,
                "adapter": adapter.display_name,
                "messages": len(request.messages),
            },
        )
        return adapter.stream_to(request, entry, api_key)

    async def handle_completion(
        self, raw_body: bytes, headers: Mapping[str, str]
    ) -> CompletionResponseBody:
        """Generate a conversation title, echoing the passthrough fields."""
        body = parse_body(CompletionRequestBody, raw_body)
        api_key = self.resolver.resolve(
            ProviderType.GOOGLE, headers, subject="Google", template=COMPLETION_KEY_MESSAGE
        )

        try:
            title = await self.title_generator.generate_title(body.prompt, api_key)
        except TitleGenerationError as exc:
            raise TitleGenerationError(f"failed to generate title: {exc.message}") from exc

        return CompletionResponseBody(
            title=title,
            is_title=body.is_title,
            message_id=body.message_id,
            thread_id=body.thread_id,
        )
