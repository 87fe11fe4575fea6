"""
Helpers shared by the vendor adapters.
"""

from typing import Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import UnparsableResponseError

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)

JSON_HEADERS = {"Content-Type": "application/json"}


def bearer_headers(credential: str, json_body: bool = True) -> Dict[str, str]:
    """``Authorization: Bearer`` headers."""
    headers = dict(JSON_HEADERS) if json_body else {}
    headers["Authorization"] = f"Bearer {credential}"
    return headers


def parse_envelope(model: Type[EnvelopeT], body: bytes, provider: str) -> EnvelopeT:
    """
    Validate a JSON body against a response envelope.

    Raises:
        UnparsableResponseError: If the body is not JSON or lacks the
            expected structure
    """
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise UnparsableResponseError(
            f"Invalid response format: {e.error_count()} validation error(s)",
            provider=provider,
        )
    except ValueError:
        raise UnparsableResponseError("Invalid response format: body is not JSON", provider=provider)


def require_text(text, provider: str) -> str:
    """Reply text, or UnparsableResponseError if it is missing."""
    if text is None:
        raise UnparsableResponseError(provider=provider)
    return text


def normalize_model_ids(ids: Iterable[str]) -> List[str]:
    """Drop empty identifiers, deduplicate and sort."""
    return sorted({model_id for model_id in ids if model_id})
