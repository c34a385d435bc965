"""Chat streaming, title completion, and model discovery endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from backend.config import get_settings
from backend.providers import AdapterRegistry, CredentialResolver, list_names, lookup
from backend.services import ChatService, TitleGenerator
from backend.services.schemas import ModelSummary

router = APIRouter(prefix="/api", tags=["chat"])

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def get_chat_service(request: Request) -> ChatService:
    service = getattr(request.app.state, "chat_service", None)
    if service:
        return service
    settings = get_settings()
    registry = getattr(request.app.state, "adapter_registry", None)
    if registry is None:
        registry = AdapterRegistry(settings)
        request.app.state.adapter_registry = registry
    service = ChatService(
        registry=registry,
        resolver=CredentialResolver(settings),
        title_generator=TitleGenerator(
            model=settings.title_model,
            timeout=settings.title_timeout_seconds,
        ),
    )
    request.app.state.chat_service = service
    return service


@router.post("/chat")
async def chat_route(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    raw_body = await request.body()
    stream = chat_service.handle_chat(raw_body, request.headers)
    return StreamingResponse(
        stream,
        media_type="text/plain; charset=utf-8",
        headers=STREAM_HEADERS,
    )


@router.post("/completion")
async def completion_route(
    request: Request,
    chat_service: ChatService = Depends(get_chat_service),
) -> dict[str, Any]:
    raw_body = await request.body()
    response = await chat_service.handle_completion(raw_body, request.headers)
    return response.model_dump(by_alias=True)


@router.get("/models")
async def list_models_route() -> dict[str, Any]:
    """List supported models and the header each one reads its key from."""
    entries = [lookup(name) for name in sorted(list_names())]
    models = [
        ModelSummary(
            name=entry.name,
            provider=entry.provider.value,
            model_id=entry.model_id,
            header_key=entry.credential_header,
        ).model_dump(by_alias=True)
        for entry in entries
        if entry is not None
    ]
    return {"models": models}
