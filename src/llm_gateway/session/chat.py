"""
Chat service: wires the session store to the gateway.
"""

import logging
from typing import List, Optional

from .models import ChatMessage
from .store import SessionStore
from ..core.errors import GatewayError
from ..core.gateway import Gateway
from ..models.request import Role

logger = logging.getLogger(__name__)

NO_CREDENTIAL_MESSAGE = "Please configure an API key in Settings to start chatting."


class ChatService:
    """
    Sends user messages through the active configuration.

    Failed turns are recorded in the history as error notices instead of
    being raised.
    """

    def __init__(self, store: SessionStore, gateway: Gateway):
        self.store = store
        self.gateway = gateway
        self._refresh_generation = 0

    async def send_message(self, text: str) -> Optional[ChatMessage]:
        """
        Append a user message and the assistant's answer to the current session.

        Args:
            text: User text; blank text is ignored

        Returns:
            The assistant message (or error notice), None for blank text
        """
        if not text.strip():
            return None

        session = self.store.current_session or await self.store.create_session()
        prior_turns = self.store.turns(session.id)
        await self.store.append_message(session.id, Role.USER, text)

        config = self.store.active_configuration()
        if config is None or not config.has_credential:
            return await self.store.append_message(
                session.id, Role.ASSISTANT, NO_CREDENTIAL_MESSAGE, is_error=True
            )

        fallback = self.gateway.registry.fallback_models(config.provider)
        model = config.selected_model or (fallback[0] if fallback else "")

        try:
            reply = await self.gateway.send_turn(
                config.provider,
                config.credential,
                model,
                prior_turns,
                text,
                custom_endpoint=config.custom_endpoint or None,
            )
        except GatewayError as e:
            return await self.store.append_message(
                session.id, Role.ASSISTANT, f"Error: {e.message}", is_error=True
            )

        return await self.store.append_message(session.id, Role.ASSISTANT, reply)

    async def refresh_models(self) -> Optional[List[str]]:
        """
        Model choices for the active configuration.

        Returns the live list, or the provider's fallback list when
        discovery fails. Returns None if a newer refresh started, or the
        active configuration changed, while this one was in flight. A live
        list that lacks the selected model clears the selection.
        """
        self._refresh_generation += 1
        generation = self._refresh_generation

        config = self.store.active_configuration()
        if config is None:
            return []

        live = True
        try:
            models = await self.gateway.fetch_models(
                config.provider,
                config.credential,
                custom_endpoint=config.custom_endpoint or None,
            )
        except GatewayError as e:
            logger.info(f"Using fallback models for {config.provider.value}: {e.message}")
            models = self.gateway.registry.fallback_models(config.provider)
            live = False

        if generation != self._refresh_generation:
            return None

        active = self.store.active_configuration()
        if active is None or active.id != config.id:
            logger.info(f"Discarding models fetched for inactive configuration {config.id}")
            return None

        if live and config.selected_model and config.selected_model not in models:
            await self.store.clear_selected_model(config.id, config.selected_model)

        return models
