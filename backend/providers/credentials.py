"""
Credential resolution.

A provider key comes from the provider's request header first and from
the process-wide settings (environment) second.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from backend.config import Settings
from backend.core import MissingCredentialError
from backend.core.errors import MISSING_CREDENTIAL_MESSAGE
from backend.providers.base import ProviderType


@dataclass(frozen=True)
class CredentialRule:
    """Where to look for a provider's API key."""

    header_name: str
    env_var: str
    settings_field: str


CREDENTIAL_RULES: dict[ProviderType, CredentialRule] = {
    ProviderType.GOOGLE: CredentialRule("X-Google-API-Key", "GOOGLE_API_KEY", "google_api_key"),
    ProviderType.OPENAI: CredentialRule("X-OpenAI-API-Key", "OPENAI_API_KEY", "openai_api_key"),
    ProviderType.OPENROUTER: CredentialRule(
        "X-OpenRouter-API-Key", "OPENROUTER_API_KEY", "openrouter_api_key"
    ),
}


class CredentialResolver:
    """Resolve provider API keys from request headers or configured fallbacks."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def resolve(
        self,
        provider: ProviderType,
        headers: Mapping[str, str],
        subject: str | None = None,
        template: str = MISSING_CREDENTIAL_MESSAGE,
    ) -> str:
        """
        Return the API key for a provider.

        Args:
            provider: Provider whose key is needed
            headers: Incoming request headers (case-insensitive mapping)
            subject: Name used in the error message, defaults to the provider
            template: Message format with {subject}, {header} and {env_var} fields

        Raises:
            MissingCredentialError: If neither the header nor the fallback is set
        """
        rule = CREDENTIAL_RULES[provider]
        api_key = (headers.get(rule.header_name) or "").strip()
        if not api_key:
            api_key = getattr(self.settings, rule.settings_field, "") or ""
        if not api_key:
            raise MissingCredentialError(
                subject or provider.value, rule.header_name, rule.env_var, template=template
            )
        return api_key
