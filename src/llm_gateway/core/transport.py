"""
Async HTTP transport for vendor calls.
"""

import logging
from typing import Optional, Tuple

import httpx

from .config import DEFAULT_TIMEOUT
from .errors import GatewayConnectionError, GatewayTimeoutError, InvalidCustomEndpointError
from .registry import Provider
from ..models.request import WireRequest

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Performs exactly one HTTP exchange per call.

    Owns an ``httpx.AsyncClient`` unless one is injected; an injected
    client (for example one backed by ``httpx.MockTransport``) is never
    closed here.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds
            client: Existing HTTP client to borrow
            transport: httpx transport for an owned client
        """
        self.timeout = timeout
        self._client = client
        self._transport = transport
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def exchange(self, wire: WireRequest, provider: Provider) -> Tuple[int, bytes]:
        """
        Send a wire request and read the full response.

        Args:
            wire: Request to send
            provider: Vendor, for error attribution

        Returns:
            HTTP status and raw body

        Raises:
            GatewayTimeoutError: If the timeout expires
            GatewayConnectionError: If no response was received
            InvalidCustomEndpointError: If a custom URL cannot be requested
        """
        provider = Provider(provider)
        client = self._get_client()
        logger.debug(f"{provider.value}: {wire.method} {wire.redacted_url()}")

        try:
            request = client.build_request(
                wire.method,
                wire.url,
                headers=wire.headers,
                json=wire.body,
                timeout=self.timeout,
            )
            response = await client.send(request)
        except httpx.InvalidURL as e:
            if provider == Provider.CUSTOM:
                raise InvalidCustomEndpointError(provider=provider.value, endpoint=wire.url)
            raise GatewayConnectionError(f"Invalid request URL: {e}", provider=provider.value)
        except httpx.TimeoutException:
            raise GatewayTimeoutError(
                f"Request timed out after {self.timeout}s",
                provider=provider.value,
            )
        except httpx.RequestError as e:
            raise GatewayConnectionError(
                f"Network error: {str(e) or e.__class__.__name__}",
                provider=provider.value,
            )

        if not response.is_success:
            logger.warning(f"{provider.value} responded with HTTP {response.status_code}")
        return response.status_code, response.content
