"""
LLM Gateway

One normalized interface over incompatible LLM vendor APIs:
- Per-vendor request construction and response decoding
- Live model discovery with static fallback lists
- A single error taxonomy for every vendor
- Configuration-based endpoint overrides
"""

from .core.errors import (
    GatewayErrorKind,
    GatewayError,
    MissingCredentialError,
    InvalidCustomEndpointError,
    HttpFailureError,
    UnparsableResponseError,
    GatewayTimeoutError,
    GatewayConnectionError,
)
from .core.registry import Provider, ProviderRegistry, get_registry
from .core.config import GatewayConfig, load_config
from .core.builder import build_request, build_models_request
from .core.decoder import decode_reply, decode_models
from .core.discovery import ModelDiscoveryService
from .core.gateway import Gateway
from .models.request import Role, ConversationTurn, WireRequest
from .adapters.custom_adapter import derive_models_url

__all__ = [
    "GatewayErrorKind",
    "GatewayError",
    "MissingCredentialError",
    "InvalidCustomEndpointError",
    "HttpFailureError",
    "UnparsableResponseError",
    "GatewayTimeoutError",
    "GatewayConnectionError",
    "Provider",
    "ProviderRegistry",
    "get_registry",
    "GatewayConfig",
    "load_config",
    "build_request",
    "build_models_request",
    "decode_reply",
    "decode_models",
    "ModelDiscoveryService",
    "Gateway",
    "Role",
    "ConversationTurn",
    "WireRequest",
    "derive_models_url",
]
