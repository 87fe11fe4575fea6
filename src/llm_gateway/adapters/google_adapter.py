"""
Google Gemini (Generative Language API) adapter.

Gemini takes the API key as a ``key`` query parameter instead of a
header, so requests built here never carry an auth header.
"""

from typing import Any, Dict, List
from urllib.parse import quote

from ..core.config import GatewayConfig
from ..core.registry import ProviderInfo
from ..models.request import GatewayRequest, WireRequest
from ..models.response import GoogleGenerateResponse, GoogleModelList
from .common import JSON_HEADERS, parse_envelope, require_text, normalize_model_ids


def encode_key(credential: str) -> str:
    """Percent-encode a credential for the query string."""
    return quote(credential, safe="")


def _build_gemini_payload(request: GatewayRequest) -> Dict[str, Any]:
    # Only the newest user turn is sent; prior turns are not replayed.
    return {
        "contents": [
            {"parts": [{"text": request.latest_user_text()}]},
        ],
        "generationConfig": {"maxOutputTokens": request.max_tokens},
    }


def build_chat_request(request: GatewayRequest, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    """``POST {base}/{model}:generateContent?key={credential}``"""
    base = info.chat_url.rstrip("/")
    return WireRequest(
        url=f"{base}/{request.model}:generateContent?key={encode_key(request.credential)}",
        method="POST",
        headers=dict(JSON_HEADERS),
        body=_build_gemini_payload(request),
    )


def build_models_request(credential: str, info: ProviderInfo, config: GatewayConfig) -> WireRequest:
    """``GET /v1beta/models?key={credential}``"""
    return WireRequest(
        url=f"{info.models_url}?key={encode_key(credential)}",
        method="GET",
        headers={},
    )


def extract_reply(body: bytes, provider: str) -> str:
    """``candidates[0].content.parts[0].text``"""
    envelope = parse_envelope(GoogleGenerateResponse, body, provider)
    return require_text(envelope.reply_text(), provider)


def extract_model_ids(body: bytes, provider: str) -> List[str]:
    """``models[].name`` with the ``models/`` prefix stripped."""
    envelope = parse_envelope(GoogleModelList, body, provider)
    return normalize_model_ids(envelope.model_ids())
