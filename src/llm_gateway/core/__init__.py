"""
Core gateway components.
"""

from .errors import (
    GatewayErrorKind,
    GatewayError,
    MissingCredentialError,
    InvalidCustomEndpointError,
    HttpFailureError,
    UnparsableResponseError,
    GatewayTimeoutError,
    GatewayConnectionError,
)
from .registry import Provider, AuthScheme, ProviderInfo, ProviderRegistry, get_registry
from .config import GatewayConfig, load_config

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
    "AuthScheme",
    "ProviderInfo",
    "ProviderRegistry",
    "get_registry",
    "GatewayConfig",
    "load_config",
]
