"""
Anthropic Messages API adapter.
"""

from typing import Dict, List

from ..core.config import GatewayConfig
from ..core.registry import ProviderInfo
from ..models.request import GatewayRequest, WireRequest
from ..models.response import AnthropicMessageResponse, AnthropicModelList
from .common import JSON_HEADERS, parse_envelope, require_text, normalize_model_ids


def _auth_headers(credential: str, version: str, json_body: bool = True) -> Dict[str, str]:
    headers = dict(JSON_HEADERS) if json_body else {}
    headers["x-api-key"] = credential
    headers["anthropic-version"] = version
    return headers


def build_chat_request(request: GatewayRequest, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    """
    ``POST /v1/messages``.

    Turns are passed through with their own roles; there is no
    system-role translation.
    """
    return WireRequest(
        url=info.chat_url,
        method="POST",
        headers=_auth_headers(request.credential, config.anthropic_version),
        body={
            "model": request.model,
            "max_tokens": request.max_tokens,
            "messages": [turn.to_message() for turn in request.turns],
        },
    )


def build_models_request(credential: str, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    return WireRequest(
        url=info.models_url,
        method="GET",
        headers=_auth_headers(credential, config.anthropic_version, json_body=False),
    )


def extract_reply(body: bytes, provider: str) -> str:
    """``content[0].text``"""
    envelope = parse_envelope(AnthropicMessageResponse, body, provider)
    return require_text(envelope.reply_text(), provider)


def extract_model_ids(body: bytes, provider: str) -> List[str]:
    """``data[]`` or ``models[]``, each item's ``id`` falling back to ``name``."""
    envelope = parse_envelope(AnthropicModelList, body, provider)
    return normalize_model_ids(envelope.model_ids())
