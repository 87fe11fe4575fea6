"""
OpenAI-compatible adapter.

Serves OpenAI and Mistral directly, and is reused by the custom
adapter for OpenAI-compatible endpoints.
"""

from typing import List

from ..core.config import GatewayConfig
from ..core.registry import ProviderInfo
from ..models.request import GatewayRequest, WireRequest
from ..models.response import OpenAIChatResponse, OpenAIModelList
from .common import bearer_headers, parse_envelope, require_text, normalize_model_ids


def chat_request(url: str, request: GatewayRequest) -> WireRequest:
    """``POST {url}`` with an OpenAI chat/completions body."""
    return WireRequest(
        url=url,
        method="POST",
        headers=bearer_headers(request.credential),
        body={
            "model": request.model,
            "messages": [turn.to_message() for turn in request.turns],
            "max_tokens": request.max_tokens,
        },
    )


def models_request(url: str, credential: str) -> WireRequest:
    """``GET {url}`` with bearer auth."""
    return WireRequest(url=url, method="GET", headers=bearer_headers(credential, json_body=False))


def build_chat_request(request: GatewayRequest, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    return chat_request(info.chat_url, request)


def build_models_request(credential: str, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    return models_request(info.models_url, credential)


def extract_reply(body: bytes, provider: str) -> str:
    """``choices[0].message.content``"""
    envelope = parse_envelope(OpenAIChatResponse, body, provider)
    return require_text(envelope.reply_text(), provider)


def extract_model_ids(body: bytes, provider: str) -> List[str]:
    """``data[].id``"""
    envelope = parse_envelope(OpenAIModelList, body, provider)
    return normalize_model_ids(envelope.model_ids())
