"""
Model discovery: probe a vendor's live model catalog.
"""

import logging
from typing import List, Optional

from opentelemetry import trace

from .builder import build_models_request
from .config import GatewayConfig
from .decoder import decode_models
from .errors import GatewayError
from .registry import Provider, ProviderRegistry, get_registry
from .transport import HttpTransport

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ModelDiscoveryService:
    """
    Fetches and normalizes vendor model lists.

    Stateless between calls; concurrent fetches share only the HTTP
    connection pool of the transport.
    """

    def __init__(
        self,
        transport: HttpTransport,
        config: Optional[GatewayConfig] = None,
        registry: Optional[ProviderRegistry] = None,
    ):
        self._transport = transport
        self._config = config or GatewayConfig()
        self._registry = registry or get_registry()

    async def fetch_models(
        self,
        provider: Provider,
        credential: str,
        custom_endpoint: Optional[str] = None,
    ) -> List[str]:
        """
        Fetch the live model list of a provider.

        Args:
            provider: Vendor to query
            credential: API key; trimmed before use
            custom_endpoint: User endpoint, used by the custom provider only

        Returns:
            Sorted, deduplicated model identifiers

        Raises:
            MissingCredentialError: If the credential is empty (no request is sent)
            InvalidCustomEndpointError: If the custom endpoint is unusable
            HttpFailureError: On a non-2xx status
            UnparsableResponseError: If the listing is unrecognized or empty
            GatewayTimeoutError: If the request times out
            GatewayConnectionError: If no response was received
        """
        provider = Provider(provider)
        with tracer.start_as_current_span("gateway.fetch_models") as span:
            span.set_attribute("llm.provider", provider.value)
            try:
                wire = build_models_request(
                    provider,
                    credential,
                    custom_endpoint,
                    config=self._config,
                    registry=self._registry,
                )
                status, body = await self._transport.exchange(wire, provider)
                span.set_attribute("http.status_code", status)
                models = decode_models(provider, status, body)
            except GatewayError as e:
                span.set_attribute("error.kind", e.kind.value)
                raise

            span.set_attribute("llm.model_count", len(models))
            logger.info(f"Discovered {len(models)} models for {provider.value}")
            return models

    async def models_or_fallback(
        self,
        provider: Provider,
        credential: str,
        custom_endpoint: Optional[str] = None,
    ) -> List[str]:
        """
        Live model list, or the provider's static fallback list.

        An empty credential returns the fallback list without any
        network call; every discovery failure falls back as well.
        """
        provider = Provider(provider)
        fallback = self._registry.fallback_models(provider)

        if not (credential or "").strip():
            return fallback

        try:
            return await self.fetch_models(provider, credential, custom_endpoint)
        except GatewayError as e:
            logger.warning(f"Model discovery failed for {provider.value}, using fallback list: {e.message}")
            return fallback
