"""
Shared fixtures: a recording transport double for vendor calls.
"""
import json
from typing import Any, Dict, List, Optional

import httpx
import pytest


class RecordingTransport:
    """Answers every request with a fixed response and records what was sent."""

    def __init__(self, status: int = 200, payload: Any = None, content: Optional[bytes] = None):
        self.status = status
        self.payload = payload
        self.content = content
        self.requests: List[httpx.Request] = []
        self.error: Optional[Exception] = None

    def respond(self, status: int = 200, payload: Any = None, content: Optional[bytes] = None) -> None:
        self.status = status
        self.payload = payload
        self.content = content

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status, content=self.content)
        return httpx.Response(self.status, json=self.payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last_request.content)


@pytest.fixture
def recorder() -> RecordingTransport:
    return RecordingTransport()
