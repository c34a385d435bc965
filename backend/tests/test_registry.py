"""Tests for the model registry, credential resolution, and adapter selection."""

from __future__ import annotations

import pytest
from starlette.datastructures import Headers

from backend.config import Settings
from backend.core import ErrorCode, MissingCredentialError
from backend.providers import (
    CREDENTIAL_RULES,
    SUPPORTED_MODELS,
    AdapterRegistry,
    CredentialResolver,
    GoogleStreamAdapter,
    MockStreamAdapter,
    OpenRouterStreamAdapter,
    ProviderType,
    list_names,
    lookup,
)


def test_lookup_known_model() -> None:
    entry = lookup("Gemini 2.5 Flash")

    assert entry is not None
    assert entry.model_id == "gemini-2.5-flash"
    assert entry.provider is ProviderType.GOOGLE
    assert entry.credential_header == "X-Google-API-Key"


def test_lookup_unknown_model_returns_none() -> None:
    assert lookup("Claude 9") is None
    assert lookup("gemini 2.5 flash") is None


def test_list_names_matches_registry() -> None:
    names = list_names()

    assert names == set(SUPPORTED_MODELS)
    assert {"Deepseek V3", "GPT-4o", "Gemini 2.5 Pro"} <= names


def test_every_entry_has_exactly_one_credential_rule() -> None:
    assert set(CREDENTIAL_RULES) == set(ProviderType)
    for entry in SUPPORTED_MODELS.values():
        assert entry.credential_header == CREDENTIAL_RULES[entry.provider].header_name


def test_resolver_prefers_header_over_environment(settings: Settings) -> None:
    settings.openrouter_api_key = "env-key"
    resolver = CredentialResolver(settings)

    key = resolver.resolve(
        ProviderType.OPENROUTER, Headers({"x-openrouter-api-key": "header-key"})
    )

    assert key == "header-key"


def test_resolver_falls_back_to_environment(settings: Settings) -> None:
    settings.google_api_key = "env-key"
    resolver = CredentialResolver(settings)

    assert resolver.resolve(ProviderType.GOOGLE, Headers({})) == "env-key"
    assert resolver.resolve(ProviderType.GOOGLE, Headers({"X-Google-API-Key": ""})) == "env-key"


def test_resolver_error_names_header_and_environment_variable(settings: Settings) -> None:
    resolver = CredentialResolver(settings)

    with pytest.raises(MissingCredentialError) as exc:
        resolver.resolve(ProviderType.OPENAI, Headers({}), subject="GPT-4o")

    assert exc.value.code == ErrorCode.MISSING_CREDENTIAL
    assert exc.value.status_code == 400
    assert "GPT-4o" in exc.value.message
    assert "X-OpenAI-API-Key" in exc.value.message
    assert "OPENAI_API_KEY" in exc.value.message


@pytest.mark.asyncio
async def test_registry_selects_adapter_by_provider(settings: Settings) -> None:
    registry = AdapterRegistry(settings)

    assert isinstance(registry.get(ProviderType.GOOGLE), GoogleStreamAdapter)
    assert isinstance(registry.get(ProviderType.OPENROUTER), OpenRouterStreamAdapter)
    # No live OpenAI integration: falls back to the mock
    assert isinstance(registry.get(ProviderType.OPENAI), MockStreamAdapter)
    await registry.aclose()
