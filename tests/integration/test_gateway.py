"""
Integration tests for Gateway.send_turn.

Each test drives one full Validating -> Building -> Sending -> Decoding
pass against a recording httpx.MockTransport.
"""
import httpx
import pytest

from llm_gateway.core.config import GatewayConfig
from llm_gateway.core.errors import (
    GatewayConnectionError,
    GatewayError,
    GatewayErrorKind,
    GatewayTimeoutError,
    HttpFailureError,
    InvalidCustomEndpointError,
    MissingCredentialError,
    UnparsableResponseError,
)
from llm_gateway.core.gateway import Gateway
from llm_gateway.core.registry import Provider
from llm_gateway.models.request import ConversationTurn


PRIOR = [
    ConversationTurn.user("What is 2 + 2?"),
    ConversationTurn.assistant("4"),
]

OPENAI_OK = {"choices": [{"message": {"role": "assistant", "content": "6"}}]}
ANTHROPIC_OK = {"content": [{"type": "text", "text": "6"}]}
GOOGLE_OK = {"candidates": [{"content": {"parts": [{"text": "6"}]}}]}


class TestSendTurn:
    """Test sending chat turns."""

    @pytest.mark.asyncio
    async def test_openai_turn(self, recorder):
        """Test the full history is replayed in order."""
        recorder.respond(200, OPENAI_OK)
        async with Gateway(transport=recorder.transport()) as gateway:
            reply = await gateway.send_turn(Provider.OPENAI, "sk-test", "gpt-4o-mini", PRIOR, "And 3 + 3?")

        assert reply == "6"
        request = recorder.last_request
        assert request.method == "POST"
        assert str(request.url) == "https://api.openai.com/v1/chat/completions"
        assert request.headers["authorization"] == "Bearer sk-test"
        assert recorder.last_json() == {
            "model": "gpt-4o-mini",
            "messages": [
                {"role": "user", "content": "What is 2 + 2?"},
                {"role": "assistant", "content": "4"},
                {"role": "user", "content": "And 3 + 3?"},
            ],
            "max_tokens": 4096,
        }

    @pytest.mark.asyncio
    async def test_anthropic_turn(self, recorder):
        """Test Anthropic headers reach the wire."""
        recorder.respond(200, ANTHROPIC_OK)
        async with Gateway(transport=recorder.transport()) as gateway:
            reply = await gateway.send_turn(
                Provider.ANTHROPIC, "sk-ant", "claude-3-5-haiku-latest", PRIOR, "And 3 + 3?"
            )

        assert reply == "6"
        request = recorder.last_request
        assert str(request.url) == "https://api.anthropic.com/v1/messages"
        assert request.headers["x-api-key"] == "sk-ant"
        assert request.headers["anthropic-version"] == "2023-06-01"
        assert "authorization" not in request.headers
        assert len(recorder.last_json()["messages"]) == 3

    @pytest.mark.asyncio
    async def test_google_turn(self, recorder):
        """Test Gemini receives only the newest user turn."""
        recorder.respond(200, GOOGLE_OK)
        async with Gateway(transport=recorder.transport()) as gateway:
            reply = await gateway.send_turn(Provider.GOOGLE, "AIza", "gemini-1.5-flash", PRIOR, "And 3 + 3?")

        assert reply == "6"
        request = recorder.last_request
        assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
        assert request.url.params["key"] == "AIza"
        assert "authorization" not in request.headers
        assert recorder.last_json()["contents"] == [{"parts": [{"text": "And 3 + 3?"}]}]

    @pytest.mark.asyncio
    async def test_custom_turn(self, recorder):
        """Test custom endpoints get OpenAI semantics."""
        recorder.respond(200, OPENAI_OK)
        async with Gateway(transport=recorder.transport()) as gateway:
            reply = await gateway.send_turn(
                Provider.CUSTOM, "key", "llama3", [], "Hi", custom_endpoint="http://localhost:8000/v1/chat"
            )

        assert reply == "6"
        assert str(recorder.last_request.url) == "http://localhost:8000/v1/chat/completions"

    @pytest.mark.asyncio
    async def test_config_overrides_reach_the_wire(self, recorder):
        """Test configured endpoints and token caps are used."""
        config = GatewayConfig.from_dict({
            "max_tokens": 100,
            "providers": {"openai": {"chat_url": "https://proxy.local/v1/chat/completions"}},
        })
        recorder.respond(200, OPENAI_OK)
        async with Gateway(config=config, transport=recorder.transport()) as gateway:
            await gateway.send_turn(Provider.OPENAI, "sk-test", "gpt-4o", [], "Hi")

        assert str(recorder.last_request.url) == "https://proxy.local/v1/chat/completions"
        assert recorder.last_json()["max_tokens"] == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider", list(Provider))
    async def test_missing_credential_sends_nothing(self, recorder, provider):
        """Test empty credentials never reach the network."""
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(MissingCredentialError):
                await gateway.send_turn(provider, " \t ", "m", PRIOR, "Hi", custom_endpoint="https://host/v1")
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_invalid_custom_endpoint(self, recorder):
        """Test custom turns need a valid endpoint."""
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(InvalidCustomEndpointError):
                await gateway.send_turn(Provider.CUSTOM, "key", "llama3", [], "Hi", custom_endpoint="")
        assert recorder.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider", list(Provider))
    async def test_http_failure(self, recorder, provider):
        """Test non-2xx responses surface status and body."""
        recorder.respond(401, content=b"unauthorized")
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(HttpFailureError) as exc_info:
                await gateway.send_turn(provider, "bad", "m", [], "Hi", custom_endpoint="https://host/v1")

        assert exc_info.value.status == 401
        assert exc_info.value.body == "unauthorized"
        assert exc_info.value.kind == GatewayErrorKind.HTTP_FAILURE

    @pytest.mark.asyncio
    async def test_unparsable_reply(self, recorder):
        """Test a wrong-shaped 200 body is unparsable."""
        recorder.respond(200, ANTHROPIC_OK)
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(UnparsableResponseError):
                await gateway.send_turn(Provider.OPENAI, "sk-test", "gpt-4o", [], "Hi")

    @pytest.mark.asyncio
    async def test_single_attempt(self, recorder):
        """Test failures are not retried."""
        recorder.respond(503, content=b"overloaded")
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(HttpFailureError):
                await gateway.send_turn(Provider.ANTHROPIC, "sk-ant", "m", [], "Hi")
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout(self, recorder):
        """Test timeouts become GatewayTimeoutError."""
        recorder.fail_with(httpx.ConnectTimeout("timed out"))
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(GatewayTimeoutError) as exc_info:
                await gateway.send_turn(Provider.OPENAI, "sk-test", "gpt-4o", [], "Hi")
        assert exc_info.value.kind == GatewayErrorKind.TIMEOUT

    @pytest.mark.asyncio
    async def test_network_error(self, recorder):
        """Test transport failures become GatewayConnectionError."""
        recorder.fail_with(httpx.ConnectError("connection refused"))
        async with Gateway(transport=recorder.transport()) as gateway:
            with pytest.raises(GatewayConnectionError):
                await gateway.send_turn(Provider.GOOGLE, "AIza", "gemini-1.5-pro", [], "Hi")

    @pytest.mark.asyncio
    async def test_only_gateway_errors_escape(self, recorder):
        """Test garbage bodies never leak raw parse errors."""
        recorder.respond(200, content=b"<html>502 Bad Gateway</html>")
        async with Gateway(transport=recorder.transport()) as gateway:
            for provider in (Provider.OPENAI, Provider.ANTHROPIC, Provider.GOOGLE):
                with pytest.raises(GatewayError):
                    await gateway.send_turn(provider, "k", "m", [], "Hi")

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self, recorder):
        """Test a borrowed client stays open after the gateway closes."""
        recorder.respond(200, OPENAI_OK)
        async with httpx.AsyncClient(transport=recorder.transport()) as client:
            async with Gateway(client=client) as gateway:
                await gateway.send_turn(Provider.OPENAI, "sk-test", "gpt-4o", [], "Hi")
            assert not client.is_closed
