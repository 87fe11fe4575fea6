"""
Gateway data models.
"""

from .request import Role, ConversationTurn, GatewayRequest, WireRequest
from .response import (
    OpenAIChatResponse,
    AnthropicMessageResponse,
    GoogleGenerateResponse,
    OpenAIModelList,
    AnthropicModelList,
    GoogleModelList,
)

__all__ = [
    "Role",
    "ConversationTurn",
    "GatewayRequest",
    "WireRequest",
    "OpenAIChatResponse",
    "AnthropicMessageResponse",
    "GoogleGenerateResponse",
    "OpenAIModelList",
    "AnthropicModelList",
    "GoogleModelList",
]
