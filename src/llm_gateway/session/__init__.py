"""
Reference session layer: persistence of conversations and configurations.
"""

from .storage import KeyValueStorage, InMemoryStorage, FileStorage
from .models import ChatMessage, ChatSession, APIConfiguration
from .store import SessionStore, SessionNotFoundError
from .chat import ChatService

__all__ = [
    "KeyValueStorage",
    "InMemoryStorage",
    "FileStorage",
    "ChatMessage",
    "ChatSession",
    "APIConfiguration",
    "SessionStore",
    "SessionNotFoundError",
    "ChatService",
]
