from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.config import Settings
from backend.main import create_app
from backend.providers import AdapterRegistry, CredentialResolver
from backend.services import ChatService, TitleGenerator
from backend.tests.fakes import FakeGenai


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the host environment and .env files."""
    return Settings(
        _env_file=None,
        google_api_key="",
        openai_api_key="",
        openrouter_api_key="",
        openrouter_base_url="http://openrouter.test/api/v1",
        chat_timeout_seconds=5,
        title_timeout_seconds=5,
        mock_chunk_delay_seconds=0,
    )


@pytest.fixture
def fake_genai() -> FakeGenai:
    return FakeGenai()


@pytest.fixture
def upstream_requests() -> list[httpx.Request]:
    """Requests seen by the fake OpenRouter transport."""
    return []


@pytest.fixture
def openrouter_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Default OpenRouter reply; tests override this fixture as needed."""

    def handler(_request: httpx.Request) -> httpx.Response:
        body = b'data: {"choices":[{"delta":{"content":"hi"}}]}\n\ndata: [DONE]\n\n'
        return httpx.Response(200, content=body)

    return handler


@pytest.fixture
def make_client(
    fake_genai: FakeGenai,
    upstream_requests: list[httpx.Request],
    openrouter_handler: Callable[[httpx.Request], httpx.Response],
) -> Iterator[Callable[[Settings], TestClient]]:
    """Build a TestClient wired to fake upstreams for the given settings."""
    clients: list[TestClient] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return openrouter_handler(request)

    def factory(settings: Settings) -> TestClient:
        registry = AdapterRegistry(
            settings,
            transport=httpx.MockTransport(recording_handler),
            genai_client_factory=fake_genai,
        )
        app = create_app()
        app.state.adapter_registry = registry
        app.state.chat_service = ChatService(
            registry=registry,
            resolver=CredentialResolver(settings),
            title_generator=TitleGenerator(
                model=settings.title_model,
                timeout=settings.title_timeout_seconds,
                client_factory=fake_genai,
            ),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client: Callable[[Settings], TestClient], settings: Settings) -> TestClient:
    return make_client(settings)
