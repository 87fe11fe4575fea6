"""
Custom OpenAI-compatible endpoint adapter.

The user supplies a single endpoint URL (for example
``https://host/v1/chat``); the chat and model-listing URLs are derived
from it. Auth and payloads follow OpenAI semantics.
"""

import logging
from typing import Optional

import httpx

from ..core.errors import InvalidCustomEndpointError
from ..core.registry import Provider
from ..models.request import GatewayRequest, WireRequest
from . import openai_adapter

logger = logging.getLogger(__name__)

VERSION_MARKER = "/v1"
CHAT_SUFFIX = "chat/completions"
MODELS_SUFFIX = "models"


def _invalid(endpoint: Optional[str]) -> InvalidCustomEndpointError:
    return InvalidCustomEndpointError(provider=Provider.CUSTOM.value, endpoint=endpoint)


def parse_endpoint(endpoint: Optional[str]) -> httpx.URL:
    """
    Parse a user-entered endpoint.

    Raises:
        InvalidCustomEndpointError: If the trimmed value is not an
            absolute URL with a scheme
    """
    raw = (endpoint or "").strip()
    if not raw:
        raise _invalid(endpoint)
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL:
        raise _invalid(endpoint)
    if not url.scheme:
        raise _invalid(endpoint)
    return url


def derive_url(endpoint: Optional[str], suffix: str) -> str:
    """
    Derive a sibling URL of a user-entered endpoint.

    If ``/v1`` occurs in the URL, everything after its first occurrence
    is replaced by ``/{suffix}``; otherwise ``suffix`` is appended as new
    path segment(s).
    """
    url = parse_endpoint(endpoint)
    raw = endpoint.strip()

    marker = raw.find(VERSION_MARKER)
    if marker >= 0:
        derived = raw[:marker + len(VERSION_MARKER)] + "/" + suffix
    else:
        path = url.path.rstrip("/")
        derived = str(url.copy_with(path=f"{path}/{suffix}"))

    try:
        result = httpx.URL(derived)
    except httpx.InvalidURL:
        raise _invalid(endpoint)
    if not result.scheme:
        raise _invalid(endpoint)
    return derived


def derive_models_url(endpoint: Optional[str]) -> str:
    """
    Listing URL for a custom endpoint.

    ``https://host/v1/chat/completions`` -> ``https://host/v1/models``;
    ``https://host/api`` -> ``https://host/api/models``.
    """
    return derive_url(endpoint, MODELS_SUFFIX)


def derive_chat_url(endpoint: Optional[str]) -> str:
    """Chat URL for a custom endpoint; a full chat/completions URL is kept."""
    url = parse_endpoint(endpoint)
    if url.path.rstrip("/").endswith("/" + CHAT_SUFFIX):
        return endpoint.strip()
    return derive_url(endpoint, CHAT_SUFFIX)


def build_chat_request(request: GatewayRequest) -> WireRequest:
    return openai_adapter.chat_request(derive_chat_url(request.endpoint_override), request)


def build_models_request(credential: str, endpoint: Optional[str]) -> WireRequest:
    url = derive_models_url(endpoint)
    logger.debug(f"Derived custom models URL: {url}")
    return openai_adapter.models_request(url, credential)


extract_reply = openai_adapter.extract_reply
extract_model_ids = openai_adapter.extract_model_ids
