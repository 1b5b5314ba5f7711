"""Pytest fixtures and configuration for test suite

This module provides:
1. Client fixtures with credentials shared across tests
2. A factory that routes a client's HTTP traffic to an in-process handler
   (httpx.MockTransport) and records the requests it receives
"""
from typing import Callable, List

import httpx
import pytest
import pytest_asyncio

from pushnotifications import AsyncPushNotifications, PushNotifications


INSTANCE_ID = "i-123"
SECRET_KEY = "k-456"


@pytest.fixture
def publish_body():
    """Publish body used in the Beams quickstart."""
    return {
        "fcm": {
            "notification": {
                "title": "Hello",
                "body": "Hello, world",
            },
        },
    }


@pytest.fixture
def beams_client():
    """Blocking client against the default endpoint."""
    client = PushNotifications(INSTANCE_ID, SECRET_KEY)
    yield client
    client.close()


@pytest_asyncio.fixture
async def async_beams_client():
    """Async client against the default endpoint."""
    client = AsyncPushNotifications(INSTANCE_ID, SECRET_KEY)
    yield client
    await client.aclose()


@pytest.fixture
def mock_beams() -> Callable:
    """
    Route a client's requests to a handler.

    Usage:
        requests = mock_beams(beams_client, lambda request: make_publish_response())
        beams_client.publish_to_interests(...)
        assert requests[0].method == "POST"

    The handler may also raise an httpx exception to simulate a network failure.
    Works for both the blocking and the async client.
    """
    def install(client, handler: Callable[[httpx.Request], httpx.Response]) -> List[httpx.Request]:
        requests: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording_handler)
        if isinstance(client, AsyncPushNotifications):
            client._async_client = httpx.AsyncClient(transport=transport)
        else:
            client._client = httpx.Client(transport=transport)
        return requests

    return install
