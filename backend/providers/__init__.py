"""Provider stream adapters and the model registry."""

from backend.providers.base import (
    BaseStreamAdapter,
    ChatMessage,
    ChatRequest,
    ModelEntry,
    ProviderType,
)
from backend.providers.catalog import SUPPORTED_MODELS, list_names, lookup
from backend.providers.credentials import CREDENTIAL_RULES, CredentialResolver
from backend.providers.google import GoogleStreamAdapter
from backend.providers.mock import MockStreamAdapter
from backend.providers.openrouter import OpenRouterStreamAdapter
from backend.providers.registry import AdapterRegistry

__all__ = [
    "BaseStreamAdapter",
    "ChatMessage",
    "ChatRequest",
    "ModelEntry",
    "ProviderType",
    "SUPPORTED_MODELS",
    "list_names",
    "lookup",
    "CREDENTIAL_RULES",
    "CredentialResolver",
    "GoogleStreamAdapter",
    "MockStreamAdapter",
    "OpenRouterStreamAdapter",
    "AdapterRegistry",
]
