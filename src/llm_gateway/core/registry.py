"""
Provider registry: static catalog of the supported LLM vendors.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Any

from .errors import GatewayError

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    """Supported LLM vendors."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    MISTRAL = "mistral"
    CUSTOM = "custom"


class AuthScheme(str, Enum):
    """Where the credential travels on the wire."""
    BEARER = "bearer"
    API_KEY_HEADER = "api_key_header"
    QUERY_PARAM = "query_param"


@dataclass(frozen=True)
class ProviderInfo:
    """Per-vendor metadata."""
    provider: Provider
    display_name: str
    auth_scheme: AuthScheme
    chat_url: Optional[str] = None
    models_url: Optional[str] = None
    fallback_models: List[str] = field(default_factory=list)

    @property
    def requires_endpoint(self) -> bool:
        """True when the endpoint is supplied at runtime."""
        return self.chat_url is None


DEFAULT_PROVIDERS: Dict[Provider, ProviderInfo] = {
    Provider.OPENAI: ProviderInfo(
        provider=Provider.OPENAI,
        display_name="OpenAI",
        auth_scheme=AuthScheme.BEARER,
        chat_url="https://api.openai.com/v1/chat/completions",
        models_url="https://api.openai.com/v1/models",
        fallback_models=["gpt-4o-mini", "gpt-4o", "o1-mini"],
    ),
    Provider.ANTHROPIC: ProviderInfo(
        provider=Provider.ANTHROPIC,
        display_name="Anthropic",
        auth_scheme=AuthScheme.API_KEY_HEADER,
        chat_url="https://api.anthropic.com/v1/messages",
        models_url="https://api.anthropic.com/v1/models",
        fallback_models=["claude-3-5-sonnet-latest", "claude-3-5-haiku-latest"],
    ),
    Provider.GOOGLE: ProviderInfo(
        provider=Provider.GOOGLE,
        display_name="Google (Gemini)",
        auth_scheme=AuthScheme.QUERY_PARAM,
        chat_url="https://generativelanguage.googleapis.com/v1beta/models",
        models_url="https://generativelanguage.googleapis.com/v1beta/models",
        fallback_models=["gemini-1.5-pro", "gemini-1.5-flash"],
    ),
    Provider.MISTRAL: ProviderInfo(
        provider=Provider.MISTRAL,
        display_name="Mistral",
        auth_scheme=AuthScheme.BEARER,
        chat_url="https://api.mistral.ai/v1/chat/completions",
        models_url="https://api.mistral.ai/v1/models",
        fallback_models=[
            "mistral-large-latest",
            "mistral-medium-latest",
            "mistral-small-latest",
            "open-mixtral-8x22b",
        ],
    ),
    Provider.CUSTOM: ProviderInfo(
        provider=Provider.CUSTOM,
        display_name="Custom (OpenAI-compatible)",
        auth_scheme=AuthScheme.BEARER,
    ),
}


class ProviderNotFoundError(GatewayError):
    """Raised when a provider name is not in the registry."""
    pass


class ProviderRegistry:
    """
    Registry of provider metadata.

    Starts from the built-in catalog; configuration may override
    endpoints and fallback model lists per provider.
    """

    def __init__(self, providers: Optional[Dict[Provider, ProviderInfo]] = None):
        """
        Initialize the registry.

        Args:
            providers: Provider catalog. Defaults to the built-in one.
        """
        self._providers: Dict[Provider, ProviderInfo] = dict(providers or DEFAULT_PROVIDERS)

    @classmethod
    def from_config(cls, config: Any) -> "ProviderRegistry":
        """
        Build a registry with the overrides of a GatewayConfig applied.

        Args:
            config: Loaded gateway configuration

        Returns:
            Configured registry
        """
        registry = cls()
        for provider, overrides in config.providers.items():
            changes = overrides.as_changes()
            if changes:
                registry.override(provider, **changes)
        return registry

    def get(self, provider: Any) -> ProviderInfo:
        """
        Get metadata for a provider.

        Args:
            provider: Provider enum member or its string value

        Returns:
            Provider metadata

        Raises:
            ProviderNotFoundError: If the provider is unknown
        """
        try:
            key = Provider(provider)
        except ValueError:
            raise ProviderNotFoundError(f"Unknown provider: {provider}")
        if key not in self._providers:
            raise ProviderNotFoundError(f"Unknown provider: {provider}")
        return self._providers[key]

    def override(self, provider: Provider, **changes: Any) -> ProviderInfo:
        """
        Replace fields of a provider's metadata.

        Args:
            provider: Provider to change
            **changes: ProviderInfo fields to replace

        Returns:
            The updated metadata
        """
        info = replace(self.get(provider), **changes)
        self._providers[info.provider] = info
        logger.info(f"Overrode provider settings: {info.provider.value} ({', '.join(sorted(changes))})")
        return info

    def fallback_models(self, provider: Provider) -> List[str]:
        """Static model list used before live discovery succeeds."""
        return list(self.get(provider).fallback_models)

    def list_providers(self) -> List[Dict[str, Any]]:
        """
        List all providers.

        Returns:
            List of provider info dicts
        """
        return [
            {
                "provider": info.provider.value,
                "display_name": info.display_name,
                "auth_scheme": info.auth_scheme.value,
                "requires_endpoint": info.requires_endpoint,
                "fallback_models": list(info.fallback_models),
            }
            for info in self._providers.values()
        ]


# Global registry instance
_registry: Optional[ProviderRegistry] = None


def get_registry() -> ProviderRegistry:
    """Get the global provider registry."""
    global _registry
    if _registry is None:
        _registry = ProviderRegistry()
    return _registry
