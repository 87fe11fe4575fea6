"""
Request models for the gateway.
"""

from enum import Enum
from typing import Optional, List, Dict, Any
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from pydantic import BaseModel, Field

from ..core.registry import Provider


class Role(str, Enum):
    """Speaker of a conversation turn."""
    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """One message in a conversation, tagged by speaker role."""
    role: Role
    text: str

    @classmethod
    def user(cls, text: str) -> "ConversationTurn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "ConversationTurn":
        return cls(role=Role.ASSISTANT, text=text)

    def to_message(self) -> Dict[str, str]:
        """Convert to the ``{role, content}`` shape shared by OpenAI and Anthropic."""
        return {"role": self.role.value, "content": self.text}


class GatewayRequest(BaseModel):
    """
    Normalized input of a single chat call.

    Constructed and discarded per invocation; never persisted.
    """
    provider: Provider
    credential: str
    model: str
    endpoint_override: Optional[str] = None
    turns: List[ConversationTurn] = Field(default_factory=list)
    max_tokens: int = Field(default=4096, ge=1)

    def latest_user_text(self) -> str:
        """Text of the newest user turn, or an empty string."""
        for turn in reversed(self.turns):
            if turn.role == Role.USER:
                return turn.text
        return ""


class WireRequest(BaseModel):
    """A vendor-specific HTTP request, ready to send."""
    url: str
    method: str = "POST"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def redacted_url(self) -> str:
        """URL safe for logs: the ``key`` query parameter is masked."""
        parts = urlsplit(self.url)
        if not parts.query:
            return self.url
        query = [
            (name, "***" if name == "key" else value)
            for name, value in parse_qsl(parts.query, keep_blank_values=True)
        ]
        return urlunsplit(parts._replace(query=urlencode(query, safe="*")))
