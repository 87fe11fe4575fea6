"""
Gateway: the stateless per-call orchestrator.

Each call validates its input, builds the vendor request, performs one
HTTP exchange and decodes the reply. There are no retries; every
failure surfaces as a GatewayError subclass.
"""

import logging
from typing import Iterable, List, Optional

import httpx
from opentelemetry import trace

from .builder import build_request
from .config import GatewayConfig
from .decoder import decode_reply
from .discovery import ModelDiscoveryService
from .errors import GatewayError
from .registry import Provider, ProviderRegistry
from .transport import HttpTransport
from ..models.request import ConversationTurn

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class Gateway:
    """
    Unified entry point for chat turns and model discovery.

    Usage:
        async with Gateway() as gateway:
            reply = await gateway.send_turn(Provider.OPENAI, key, "gpt-4o-mini", history, "Hi")
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        registry: Optional[ProviderRegistry] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the gateway.

        Args:
            config: Gateway configuration. Defaults to built-in values.
            registry: Provider catalog. Built from ``config`` if omitted.
            client: HTTP client to borrow instead of creating one
            transport: httpx transport for the owned client
        """
        self.config = config or GatewayConfig()
        self.registry = registry or ProviderRegistry.from_config(self.config)
        self._transport = HttpTransport(
            timeout=self.config.timeout,
            client=client,
            transport=transport,
        )
        self.discovery = ModelDiscoveryService(self._transport, self.config, self.registry)

    async def __aenter__(self) -> "Gateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the HTTP client."""
        await self._transport.close()

    async def send_turn(
        self,
        provider: Provider,
        credential: str,
        model: str,
        prior_turns: Iterable[ConversationTurn],
        new_user_text: str,
        custom_endpoint: Optional[str] = None,
    ) -> str:
        """
        Send one user turn, replaying the prior conversation.

        Args:
            provider: Target vendor
            credential: API key; trimmed before use
            model: Vendor model identifier
            prior_turns: Conversation so far, oldest first
            new_user_text: Text of the new user turn
            custom_endpoint: User endpoint, used by the custom provider only

        Returns:
            Assistant reply text

        Raises:
            GatewayError: MissingCredentialError, InvalidCustomEndpointError,
                HttpFailureError, UnparsableResponseError,
                GatewayTimeoutError or GatewayConnectionError
        """
        provider = Provider(provider)
        turns: List[ConversationTurn] = list(prior_turns)
        turns.append(ConversationTurn.user(new_user_text))

        with tracer.start_as_current_span("gateway.send_turn") as span:
            span.set_attribute("llm.provider", provider.value)
            span.set_attribute("llm.model", model)
            span.set_attribute("llm.turn_count", len(turns))
            try:
                wire = build_request(
                    provider,
                    credential,
                    model,
                    turns,
                    custom_endpoint,
                    config=self.config,
                    registry=self.registry,
                )
                status, body = await self._transport.exchange(wire, provider)
                span.set_attribute("http.status_code", status)
                return decode_reply(provider, status, body)
            except GatewayError as e:
                span.set_attribute("error.kind", e.kind.value)
                logger.warning(f"Chat turn failed for {provider.value}/{model}: {e.kind.value}")
                raise

    async def fetch_models(
        self,
        provider: Provider,
        credential: str,
        custom_endpoint: Optional[str] = None,
    ) -> List[str]:
        """
        Fetch the live model list of a provider.

        See ModelDiscoveryService.fetch_models.
        """
        return await self.discovery.fetch_models(provider, credential, custom_endpoint)

    async def models_or_fallback(
        self,
        provider: Provider,
        credential: str,
        custom_endpoint: Optional[str] = None,
    ) -> List[str]:
        """Live model list, or the provider's static fallback list."""
        return await self.discovery.models_or_fallback(provider, credential, custom_endpoint)
