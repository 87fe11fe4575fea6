"""
Gateway error types.

Every failure that leaves the gateway or the discovery service is one of
these. Each class carries a ``kind`` tag so callers can switch on the
failure without isinstance chains.
"""

from enum import Enum


class GatewayErrorKind(str, Enum):
    """Tags for the gateway error taxonomy."""
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CUSTOM_ENDPOINT = "invalid_custom_endpoint"
    HTTP_FAILURE = "http_failure"
    UNPARSABLE_RESPONSE = "unparsable_response"
    TIMEOUT = "timeout"
    CONNECTION = "connection"


class GatewayError(Exception):
    """Base exception for gateway errors."""

    kind: GatewayErrorKind = GatewayErrorKind.CONNECTION

    def __init__(self, message: str, provider: str = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class MissingCredentialError(GatewayError):
    """Raised when the credential is empty or whitespace only."""

    kind = GatewayErrorKind.MISSING_CREDENTIAL

    def __init__(self, message: str = "Missing API key.", provider: str = None):
        super().__init__(message, provider)


class InvalidCustomEndpointError(GatewayError):
    """Raised when a custom endpoint is not an absolute URL."""

    kind = GatewayErrorKind.INVALID_CUSTOM_ENDPOINT

    def __init__(
        self,
        message: str = "Custom endpoint URL is invalid.",
        provider: str = None,
        endpoint: str = None,
    ):
        super().__init__(message, provider)
        self.endpoint = endpoint


class HttpFailureError(GatewayError):
    """Raised when the vendor answers with a non-2xx status."""

    kind = GatewayErrorKind.HTTP_FAILURE

    def __init__(self, status: int, body: str = "", provider: str = None):
        if body:
            message = f"Request failed (HTTP {status}): {body}"
        else:
            message = f"Request failed (HTTP {status})."
        super().__init__(message, provider)
        self.status = status
        self.body = body


class UnparsableResponseError(GatewayError):
    """Raised when a 2xx body does not match the vendor's response shape."""

    kind = GatewayErrorKind.UNPARSABLE_RESPONSE

    def __init__(self, message: str = "Invalid response format", provider: str = None):
        super().__init__(message, provider)


class GatewayTimeoutError(GatewayError):
    """Raised when request times out."""

    kind = GatewayErrorKind.TIMEOUT


class GatewayConnectionError(GatewayError):
    """Raised when the exchange fails before any HTTP status arrives."""

    kind = GatewayErrorKind.CONNECTION
