"""Shared test fixtures for the Kynhood events server tests.

This module provides:
- FakeClock: a manually advanced clock for TokenCache
- FakeApi: an httpx.MockTransport-backed stand-in for the Kynhood API that
  records every request it receives
- settings / cache / api / client / service fixtures wired together

Usage:
    async def test_something(api, service):
        api.reply("/token", 200, {"token": "abc"})
        api.reply("/events", 200, {"data": []})
        ...
"""

from collections import defaultdict, deque
from typing import Any, Optional

import httpx
import pytest

from core.config import Settings
from core.events import EventsService
from core.http import ApiClient
from core.token_cache import TokenCache

BASE_URL = "https://api.kynhood.test"


# ─────────────────────────────────────────────────────────────────────────────
# Fakes
# ─────────────────────────────────────────────────────────────────────────────


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeApi:
    """Scripted upstream keyed by URL path.

    Replies queued for a path are served in order; the last one is repeated
    once the queue is down to a single entry.  Unknown paths get a 404.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._replies: dict[str, deque] = defaultdict(deque)

    def reply(
        self,
        path: str,
        status: int = 200,
        json: Any = None,
        text: Optional[str] = None,
    ) -> None:
        self._replies[path].append(("response", status, json, text))

    def fail(self, path: str, exc_type: type = httpx.ConnectError, message: str = "boom") -> None:
        self._replies[path].append(("error", exc_type, message, None))

    def reset(self, path: str) -> None:
        self._replies.pop(path, None)

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        queue = self._replies.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"message": "Not Found"})

        kind, first, second, text = queue.popleft() if len(queue) > 1 else queue[0]
        if kind == "error":
            raise first(second, request=request)
        if text is not None:
            return httpx.Response(first, text=text)
        if second is None:
            return httpx.Response(first)
        return httpx.Response(first, json=second)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=BASE_URL, default_skip=0, default_limit=10)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TokenCache:
    return TokenCache(default_ttl=3300, clock=clock)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(api: FakeApi, cache: TokenCache) -> ApiClient:
    return ApiClient(BASE_URL, cache, timeout=5.0, transport=api.transport)


@pytest.fixture
def service(client: ApiClient) -> EventsService:
    return EventsService(client)
