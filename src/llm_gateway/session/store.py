"""
Session store: conversation history and provider configurations.

Lives outside the gateway core. The gateway never touches storage; it
receives the turns it needs from here on every call.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Type, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, TypeAdapter, ValidationError

from .models import APIConfiguration, ChatMessage, ChatSession, DEFAULT_SESSION_NAME
from .storage import KeyValueStorage
from ..models.request import ConversationTurn, Role

logger = logging.getLogger(__name__)

SESSIONS_KEY = "chatSessions"
CONFIGURATIONS_KEY = "apiConfigurations"
SESSION_NAME_LENGTH = 30

RecordT = TypeVar("RecordT", bound=BaseModel)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown."""
    pass


class SessionStore:
    """
    Owns chat sessions and API configurations.

    Mutations are serialized with an asyncio lock: the order of
    user/assistant turns must survive concurrent triggers, since it is
    replayed verbatim on the next call. Every mutation is persisted.
    """

    def __init__(self, storage: KeyValueStorage):
        """
        Initialize the store.

        Args:
            storage: Persistence capability
        """
        self._storage = storage
        self._lock = asyncio.Lock()
        self.sessions: List[ChatSession] = []
        self.configurations: List[APIConfiguration] = []
        self.current_session_id: Optional[UUID] = None

    # Persistence

    def _load_list(self, key: str, model: Type[RecordT]) -> List[RecordT]:
        data = self._storage.load(key)
        if not data:
            return []
        try:
            return TypeAdapter(List[model]).validate_json(data)
        except ValidationError as e:
            logger.error(f"Ignoring unreadable stored data under {key}: {e.error_count()} error(s)")
            return []

    def _save_list(self, key: str, model: Type[RecordT], records: List[RecordT]) -> None:
        self._storage.save(key, TypeAdapter(List[model]).dump_json(records))

    def load(self) -> None:
        """Load sessions and configurations from storage."""
        self.sessions = self._load_list(SESSIONS_KEY, ChatSession)
        self.configurations = self._load_list(CONFIGURATIONS_KEY, APIConfiguration)
        self.current_session_id = self.sessions[0].id if self.sessions else None
        logger.info(f"Loaded {len(self.sessions)} sessions and {len(self.configurations)} configurations")

    def _save_sessions(self) -> None:
        self._save_list(SESSIONS_KEY, ChatSession, self.sessions)

    def _save_configurations(self) -> None:
        self._save_list(CONFIGURATIONS_KEY, APIConfiguration, self.configurations)

    # Sessions

    @property
    def current_session(self) -> Optional[ChatSession]:
        if self.current_session_id is None:
            return None
        return next((s for s in self.sessions if s.id == self.current_session_id), None)

    def get_session(self, session_id: UUID) -> ChatSession:
        """
        Get a session by id.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        for session in self.sessions:
            if session.id == session_id:
                return session
        raise SessionNotFoundError(str(session_id))

    def switch_session(self, session_id: UUID) -> ChatSession:
        session = self.get_session(session_id)
        self.current_session_id = session.id
        return session

    def turns(self, session_id: UUID) -> List[ConversationTurn]:
        """Replayable turns of a session, oldest first; error notices excluded."""
        return [m.to_turn() for m in self.get_session(session_id).messages if not m.is_error]

    async def create_session(self) -> ChatSession:
        """Create a session at the top of the list and make it current."""
        async with self._lock:
            session = ChatSession()
            self.sessions.insert(0, session)
            self.current_session_id = session.id
            self._save_sessions()
            return session

    async def delete_session(self, session_id: UUID) -> None:
        async with self._lock:
            self.sessions = [s for s in self.sessions if s.id != session_id]
            if self.current_session_id == session_id:
                self.current_session_id = None
            self._save_sessions()

    async def append_message(
        self,
        session_id: UUID,
        role: Role,
        text: str,
        is_error: bool = False,
    ) -> ChatMessage:
        """
        Append a message to a session.

        The session is named after its first user message.

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        async with self._lock:
            session = self.get_session(session_id)
            message = ChatMessage(role=role, text=text, is_error=is_error)
            session.messages.append(message)
            session.last_modified = datetime.now(timezone.utc)

            first_user = next((m for m in session.messages if m.role == Role.USER), None)
            if first_user is not None:
                name = first_user.text[:SESSION_NAME_LENGTH]
                session.name = name if name.strip() else DEFAULT_SESSION_NAME

            self._save_sessions()
            return message

    # Configurations

    def active_configuration(self) -> Optional[APIConfiguration]:
        return next((c for c in self.configurations if c.is_active), None)

    async def add_configuration(self, config: APIConfiguration) -> APIConfiguration:
        """Append a configuration under a fresh id."""
        async with self._lock:
            added = config.model_copy(update={"id": uuid4()})
            self.configurations.append(added)
            self._save_configurations()
            return added

    async def update_configuration(self, config: APIConfiguration) -> Optional[APIConfiguration]:
        """Replace the configuration with the same id; unknown ids are ignored."""
        async with self._lock:
            for index, existing in enumerate(self.configurations):
                if existing.id == config.id:
                    self.configurations[index] = config
                    self._save_configurations()
                    return config
            logger.warning(f"Ignoring update of unknown configuration {config.id}")
            return None

    async def clear_selected_model(self, config_id: UUID, expected: str) -> Optional[APIConfiguration]:
        """
        Clear the selected model of a stored configuration.

        Only ``selected_model`` changes, and only while it still equals
        ``expected``; other fields edited in the meantime are kept.
        """
        async with self._lock:
            for index, existing in enumerate(self.configurations):
                if existing.id != config_id:
                    continue
                if existing.selected_model != expected:
                    return None
                cleared = existing.model_copy(update={"selected_model": ""})
                self.configurations[index] = cleared
                self._save_configurations()
                return cleared
            return None

    async def set_active_configuration(self, config: APIConfiguration) -> APIConfiguration:
        """
        Make exactly one configuration active.

        A configuration that is not stored yet is appended.
        """
        async with self._lock:
            active = None
            for index, existing in enumerate(self.configurations):
                is_target = existing.id == config.id
                self.configurations[index] = existing.model_copy(update={"is_active": is_target})
                if is_target:
                    active = self.configurations[index]

            if active is None:
                active = config.model_copy(update={"is_active": True})
                self.configurations.append(active)

            self._save_configurations()
            return active

    async def delete_configuration(self, config_id: UUID) -> None:
        async with self._lock:
            self.configurations = [c for c in self.configurations if c.id != config_id]
            self._save_configurations()
