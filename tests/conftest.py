"""Fixtures shared by the test modules."""

from __future__ import annotations

import json

import httpx
import pytest

from pyteslaownerapi.connection import Connection

API_BASE = "https://owner-api.example.com/api/1"
TOKEN = "abc123"


class FakeApi:
    """Records requests and answers them from a table of canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, object]] = {}

    def add(self, method: str, path: str, payload=None, status_code: int = 200) -> None:
        self.routes[(method, path)] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode()
        if (request.method, path) not in self.routes:
            return httpx.Response(404, json={"error": "not_found"})
        status_code, payload = self.routes[(request.method, path)]
        return httpx.Response(status_code, json=payload)

    def body(self, index: int = -1):
        content = self.requests[index].content
        return json.loads(content) if content else None


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def async_client(api: FakeApi) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(api.handler))


@pytest.fixture
def connection(async_client: httpx.AsyncClient) -> Connection:
    return Connection(TOKEN, api_base=API_BASE, async_client=async_client)
