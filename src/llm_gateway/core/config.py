"""
Configuration loading for the gateway.
"""

import os
import logging
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .registry import Provider

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LLM_GATEWAY_CONFIG"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_TOKENS = 4096
ANTHROPIC_VERSION = "2023-06-01"


@dataclass
class ProviderOverrides:
    """Per-provider overrides of the built-in catalog."""
    chat_url: Optional[str] = None
    models_url: Optional[str] = None
    fallback_models: Optional[List[str]] = None

    def as_changes(self) -> Dict[str, Any]:
        """Fields that were actually set."""
        changes: Dict[str, Any] = {}
        if self.chat_url:
            changes["chat_url"] = self.chat_url
        if self.models_url:
            changes["models_url"] = self.models_url
        if self.fallback_models is not None:
            changes["fallback_models"] = list(self.fallback_models)
        return changes


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    timeout: float = DEFAULT_TIMEOUT
    max_tokens: int = DEFAULT_MAX_TOKENS
    anthropic_version: str = ANTHROPIC_VERSION
    providers: Dict[Provider, ProviderOverrides] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GatewayConfig":
        """Parse a configuration mapping."""
        return _parse_config(data or {})


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses $LLM_GATEWAY_CONFIG
            or the default locations.

    Returns:
        Loaded configuration
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR)

    if config_path is None:
        # Try common locations
        paths = [
            Path("config/llm-gateway/gateway.yaml"),
            Path("/etc/llm-gateway/gateway.yaml"),
            Path.home() / ".config/llm-gateway/gateway.yaml",
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.warning("No gateway config file found, using defaults")
        return GatewayConfig()

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise ValueError("top-level YAML value must be a mapping")

        return _parse_config(data or {})

    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return GatewayConfig()


def _expand_env(value: Any) -> Any:
    """Expand a ``${VAR}`` string from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def _parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """Parse configuration dictionary."""
    providers: Dict[Provider, ProviderOverrides] = {}

    providers_data = data.get("providers") or {}
    if not isinstance(providers_data, dict):
        raise ValueError("providers must be a mapping of provider name to settings")

    for name, provider_data in providers_data.items():
        try:
            provider = Provider(name)
        except ValueError:
            logger.warning(f"Ignoring unknown provider in config: {name}")
            continue

        provider_data = provider_data or {}
        if not isinstance(provider_data, dict):
            raise ValueError(f"settings for provider {name} must be a mapping")
        fallback = provider_data.get("fallback_models")
        if fallback is not None and not isinstance(fallback, list):
            raise ValueError(f"fallback_models for provider {name} must be a list")
        providers[provider] = ProviderOverrides(
            chat_url=_expand_env(provider_data.get("chat_url")),
            models_url=_expand_env(provider_data.get("models_url")),
            fallback_models=[str(m) for m in fallback] if fallback is not None else None,
        )

    return GatewayConfig(
        timeout=float(_expand_env(data.get("timeout", DEFAULT_TIMEOUT))),
        max_tokens=int(_expand_env(data.get("max_tokens", DEFAULT_MAX_TOKENS))),
        anthropic_version=str(_expand_env(data.get("anthropic_version", ANTHROPIC_VERSION))),
        providers=providers,
    )
