"""Shared test fixtures for configly.

Provides a fake Config.ly server wired into :class:`httpx.MockTransport`,
a frozen clock, and a client factory bound to both.  Global state (the
output manager and the shared client) is reset after every test.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest

from configly import instance
from configly.client import ConfiglyClient
from configly.clock import FrozenClock
from configly.output import reset_output


API_KEY = "IM A KEY!!!"

SERVER_DATA: dict[str, dict[str, Any]] = {
    "slogan": {"type": "string", "value": "what exactly is a yeet", "ttl": 120},
    "cities": {"type": "jsonBlob", "value": ["medellin", "boston", "nyc"], "ttl": 5},
    "eatDonuts": {"type": "boolean", "value": True, "ttl": 60},
}


class FakeServer:
    """In-process stand-in for the Config.ly value endpoint.

    Records every request it receives.  Set ``status_code``/``body`` to
    answer with an error, or ``error`` to a factory returning an
    :class:`httpx.HTTPError` to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.data: dict[str, dict[str, Any]] = {k: dict(v) for k, v in SERVER_DATA.items()}
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Optional[str] = None
        self.error: Optional[Callable[[httpx.Request], Exception]] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text=self.body or "")
        if self.body is not None:
            return httpx.Response(200, text=self.body)

        keys = request.url.params.get_list("keys[]")
        return httpx.Response(
            200,
            json={
                "data": {k: self.data[k] for k in keys if k in self.data},
                "missingKeys": [k for k in keys if k not in self.data],
            },
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def requested_keys(self, index: int = -1) -> list[str]:
        return self.requests[index].url.params.get_list("keys[]")


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals() -> None:
    """Reset the output manager and the shared client after every test."""
    yield
    reset_output()
    instance.destroy()


# ---------------------------------------------------------------------------
# Server, clock and client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def http_client(server: FakeServer) -> httpx.AsyncClient:
    """An AsyncClient whose requests are answered by ``server``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(server.handler))


@pytest.fixture
def clock() -> FrozenClock:
    """A clock frozen at t=5s."""
    return FrozenClock(5)


@pytest.fixture
def make_client(http_client: httpx.AsyncClient, clock: FrozenClock):
    """Factory for clients bound to the fake server and frozen clock."""

    def _make(**kwargs: Any) -> ConfiglyClient:
        kwargs.setdefault("api_key", API_KEY)
        return ConfiglyClient(clock=clock, http_client=http_client, **kwargs)

    return _make
