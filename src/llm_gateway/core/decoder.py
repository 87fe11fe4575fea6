"""
Response decoder.

Extracts the assistant reply or the model list from a raw vendor
response. Any structural mismatch surfaces as UnparsableResponseError;
no raw parse error leaves this module.
"""

from typing import List

from .errors import HttpFailureError, UnparsableResponseError
from .registry import Provider
from ..adapters import openai_adapter, anthropic_adapter, google_adapter, custom_adapter

_REPLY_EXTRACTORS = {
    Provider.OPENAI: openai_adapter.extract_reply,
    Provider.MISTRAL: openai_adapter.extract_reply,
    Provider.CUSTOM: custom_adapter.extract_reply,
    Provider.ANTHROPIC: anthropic_adapter.extract_reply,
    Provider.GOOGLE: google_adapter.extract_reply,
}

_MODEL_EXTRACTORS = {
    Provider.OPENAI: openai_adapter.extract_model_ids,
    Provider.MISTRAL: openai_adapter.extract_model_ids,
    Provider.CUSTOM: custom_adapter.extract_model_ids,
    Provider.ANTHROPIC: anthropic_adapter.extract_model_ids,
    Provider.GOOGLE: google_adapter.extract_model_ids,
}


def body_text(body: bytes) -> str:
    """Body as UTF-8 text, or an empty string if it is not valid UTF-8."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def check_status(provider: Provider, status: int, body: bytes) -> None:
    """
    Reject non-2xx responses.

    Raises:
        HttpFailureError: If the status is outside 200..299
    """
    if not 200 <= status <= 299:
        raise HttpFailureError(status, body_text(body), provider=Provider(provider).value)


def decode_reply(provider: Provider, status: int, body: bytes) -> str:
    """
    Decode a chat response into the assistant's text.

    Raises:
        HttpFailureError: On a non-2xx status
        UnparsableResponseError: If the body lacks the expected key path
    """
    provider = Provider(provider)
    check_status(provider, status, body)
    return _REPLY_EXTRACTORS[provider](body or b"", provider.value)


def decode_models(provider: Provider, status: int, body: bytes) -> List[str]:
    """
    Decode a model-listing response into sorted, deduplicated identifiers.

    Raises:
        HttpFailureError: On a non-2xx status
        UnparsableResponseError: If the envelope does not match or is empty
    """
    provider = Provider(provider)
    check_status(provider, status, body)
    model_ids = _MODEL_EXTRACTORS[provider](body or b"", provider.value)
    if not model_ids:
        raise UnparsableResponseError("Model list is empty", provider=provider.value)
    return model_ids
