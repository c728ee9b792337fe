"""Fixtures for dashboard client tests."""

import json
from collections.abc import Callable

import httpx
import pytest

from switchboard.client import DashboardClient

Handler = Callable[[httpx.Request], httpx.Response]


class FakeApi:
    """Routes (method, path) to canned responses and records requests."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status_code: int = 200, payload=None) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status_code, json=payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def body(self, request: httpx.Request):
        return json.loads(request.content)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
async def dashboard(fake_api):
    client = DashboardClient(
        "https://dashboard.example.com/",
        token="tok_123",
        transport=httpx.MockTransport(fake_api),
    )
    yield client
    await client.close()
