"""
Persisted session records.
"""

from datetime import datetime, timezone
from typing import List
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from ..core.registry import Provider
from ..models.request import ConversationTurn, Role

DEFAULT_SESSION_NAME = "New Chat"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """A stored conversation turn."""
    id: UUID = Field(default_factory=uuid4)
    role: Role
    text: str
    timestamp: datetime = Field(default_factory=_now)

    # Error notices are shown in the history but never replayed to a vendor
    is_error: bool = False

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(role=self.role, text=self.text)


class ChatSession(BaseModel):
    """A named conversation."""
    id: UUID = Field(default_factory=uuid4)
    name: str = DEFAULT_SESSION_NAME
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    last_modified: datetime = Field(default_factory=_now)


class APIConfiguration(BaseModel):
    """Credentials and model choice for one provider."""
    id: UUID = Field(default_factory=uuid4)
    provider: Provider
    credential: str = ""
    selected_model: str = ""
    custom_endpoint: str = ""
    is_active: bool = False

    @property
    def has_credential(self) -> bool:
        return bool(self.credential.strip())
