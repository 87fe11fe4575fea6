"""
Request builder.

Turns a normalized request into a vendor-specific wire request.
Deterministic and free of I/O.
"""

from typing import Iterable, Optional

from .config import GatewayConfig
from .errors import MissingCredentialError
from .registry import Provider, ProviderRegistry, get_registry
from ..adapters import openai_adapter, anthropic_adapter, google_adapter, custom_adapter
from ..models.request import ConversationTurn, GatewayRequest, WireRequest


def require_credential(credential: Optional[str], provider: Provider = None) -> str:
    """
    Trim a credential and reject it if nothing is left.

    Raises:
        MissingCredentialError: If the credential is empty or whitespace
    """
    trimmed = (credential or "").strip()
    if not trimmed:
        raise MissingCredentialError(provider=provider.value if provider else None)
    return trimmed


def build_request(
    provider: Provider,
    credential: str,
    model: str,
    turns: Iterable[ConversationTurn],
    custom_endpoint: Optional[str] = None,
    *,
    config: Optional[GatewayConfig] = None,
    registry: Optional[ProviderRegistry] = None,
) -> WireRequest:
    """
    Build the chat request for a provider.

    Args:
        provider: Target vendor
        credential: API key; trimmed before use
        model: Vendor model identifier
        turns: Full conversation, oldest first
        custom_endpoint: User endpoint, used by the custom provider only
        config: Gateway configuration (max tokens, API versions)
        registry: Provider catalog

    Returns:
        Wire request ready to send

    Raises:
        MissingCredentialError: If the credential is empty
        InvalidCustomEndpointError: If the custom endpoint is not an absolute URL
    """
    provider = Provider(provider)
    config = config or GatewayConfig()
    info = (registry or get_registry()).get(provider)

    request = GatewayRequest(
        provider=provider,
        credential=require_credential(credential, provider),
        model=model,
        endpoint_override=custom_endpoint if provider == Provider.CUSTOM else None,
        turns=list(turns),
        max_tokens=config.max_tokens,
    )

    if provider == Provider.ANTHROPIC:
        return anthropic_adapter.build_chat_request(request, info, config)
    if provider == Provider.GOOGLE:
        return google_adapter.build_chat_request(request, info, config)
    if provider == Provider.CUSTOM:
        return custom_adapter.build_chat_request(request)
    return openai_adapter.build_chat_request(request, info, config)


def build_models_request(
    provider: Provider,
    credential: str,
    custom_endpoint: Optional[str] = None,
    *,
    config: Optional[GatewayConfig] = None,
    registry: Optional[ProviderRegistry] = None,
) -> WireRequest:
    """
    Build the model-listing request for a provider.

    Raises:
        MissingCredentialError: If the credential is empty
        InvalidCustomEndpointError: If the custom endpoint is not an absolute URL
    """
    provider = Provider(provider)
    config = config or GatewayConfig()
    info = (registry or get_registry()).get(provider)
    credential = require_credential(credential, provider)

    if provider == Provider.ANTHROPIC:
        return anthropic_adapter.build_models_request(credential, info, config)
    if provider == Provider.GOOGLE:
        return google_adapter.build_models_request(credential, info, config)
    if provider == Provider.CUSTOM:
        return custom_adapter.build_models_request(credential, custom_endpoint)
    return openai_adapter.build_models_request(credential, info, config)
