"""
Shared pytest fixtures for fcm_bridge unit tests.

HTTP traffic never leaves the process: clients are wired to an
``httpx.MockTransport`` whose handler each test supplies, and every request
the transport sees is recorded for assertions.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from fcm_bridge.core.config import FCMConfiguration
from fcm_bridge.integrations.fcm import FCMClient

CONFIGURED_SERVER_KEY = "configured-server-key"


def ok_json(body: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler that answers every request with *body* as JSON."""

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)

    return _handler


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content)


@pytest.fixture
def configuration() -> FCMConfiguration:
    """Configuration holding a default server key."""
    return FCMConfiguration(server_key=CONFIGURED_SERVER_KEY)


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest_asyncio.fixture
async def make_client(
    configuration: FCMConfiguration,
    recorded_requests: list[httpx.Request],
) -> AsyncGenerator[Callable[..., FCMClient], None]:
    """Factory building an ``FCMClient`` over a recording mock transport.

    ``make_client(handler)`` uses the shared configuration; pass
    ``configuration=None`` (or another object) to override it.
    """
    http_clients: list[httpx.AsyncClient] = []

    def _factory(handler, configuration: FCMConfiguration | None = configuration) -> FCMClient:
        def _record(request: httpx.Request):
            recorded_requests.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        http_clients.append(http_client)
        return FCMClient(configuration, http_client=http_client)

    yield _factory

    for http_client in http_clients:
        await http_client.aclose()
