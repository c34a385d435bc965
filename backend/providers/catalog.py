"""Static registry of supported models, keyed by display name."""

from types import MappingProxyType

from backend.providers.base import ModelEntry, ProviderType
from backend.providers.credentials import CREDENTIAL_RULES


def _entry(name: str, model_id: str, provider: ProviderType) -> ModelEntry:
    return ModelEntry(
        name=name,
        model_id=model_id,
        provider=provider,
        credential_header=CREDENTIAL_RULES[provider].header_name,
    )


SUPPORTED_MODELS = MappingProxyType(
    {
        entry.name: entry
        for entry in (
            _entry("Deepseek R1 0528", "deepseek/deepseek-r1-0528:free", ProviderType.OPENROUTER),
            _entry("Deepseek V3", "deepseek/deepseek-chat-v3-0324:free", ProviderType.OPENROUTER),
            _entry("Gemini 2.5 Pro", "gemini-2.5-pro", ProviderType.GOOGLE),
            _entry("Gemini 2.5 Flash", "gemini-2.5-flash", ProviderType.GOOGLE),
            _entry("Gemini 1.5 Flash", "gemini-1.5-flash", ProviderType.GOOGLE),
            _entry("GPT-4o", "gpt-4o", ProviderType.OPENAI),
            _entry("GPT-4o-mini", "gpt-4o-mini", ProviderType.OPENAI),
        )
    }
)


def lookup(display_name: str) -> ModelEntry | None:
    """Return the registry entry for a display name, or None if unknown."""
    return SUPPORTED_MODELS.get(display_name)


def list_names() -> set[str]:
    """Return every supported display name."""
    return set(SUPPORTED_MODELS)
