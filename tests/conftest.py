"""Shared fixtures: a scripted backend behind `httpx.MockTransport`."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from adapters.http_client import ApiClient, build_api_client
from adapters.session_store import MemorySessionStore
from core.config import AppSettings

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Routes `(method, path)` to canned responses and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Handler] = {}

    def on(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self._routes[(method.upper(), path)] = lambda request: httpx.Response(status, json=json)

    def on_call(self, method: str, path: str, handler: Handler) -> None:
        self._routes[(method.upper(), path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class ExpiredSpy:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        base_url="https://api.procura.test",
        session_file=tmp_path / "session.json",
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def expired() -> ExpiredSpy:
    return ExpiredSpy()


@pytest_asyncio.fixture
async def client(settings, backend, store, expired) -> ApiClient:
    api = build_api_client(
        settings,
        store=store,
        on_session_expired=expired,
        transport=backend.transport,
    )
    yield api
    await api.aclose()
