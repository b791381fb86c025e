"""Pytest fixtures and shared test configuration.

Fixtures:
    - mock_session_id: Fixed, well-formed session ID
    - webhook: Factory for TransportClients backed by httpx.MockTransport
    - async_client: HTTPX client for the FastAPI host app
"""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from webhook_chat.api import app
from webhook_chat.transport.client import TransportClient

WEBHOOK_URL = "http://webhook.test/webhook/chat"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingWebhook:
    """MockTransport wrapper that keeps every request it receives."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def client(self) -> TransportClient:
        return TransportClient(WEBHOOK_URL, transport=httpx.MockTransport(self))


@pytest.fixture
def mock_session_id() -> str:
    """Return a valid version 4 session ID for assertions."""
    return "0f8fad5b-d9cb-469f-a165-70867728950e"


@pytest.fixture
def webhook() -> Callable[[Handler], RecordingWebhook]:
    """Build a recording webhook from a request handler."""
    return RecordingWebhook


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for the host app.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
