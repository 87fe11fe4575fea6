"""
Per-vendor request builders and response decoders.
"""

from . import openai_adapter
from . import anthropic_adapter
from . import google_adapter
from . import custom_adapter
from .custom_adapter import derive_models_url, derive_chat_url

__all__ = [
    "openai_adapter",
    "anthropic_adapter",
    "google_adapter",
    "custom_adapter",
    "derive_models_url",
    "derive_chat_url",
]
