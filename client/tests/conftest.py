"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
from typing import Any, Optional

import httpx
import pytest

from shared.config import get_settings
from shared.database import reset_client_cache
from shared.http import ApiClient, reset_api_client
from shared.storage import InMemoryStorage

from modules.session.notifier import SessionNotifier
from modules.session.service import reset_session_service
from modules.session.store import SessionStore
from modules.storage.service import reset_blob_storage_service


TEST_API_URL = "http://api.test"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MockBackend:
    """
    Stub of the REST backend behind httpx.MockTransport.

    Routes are keyed by method and path. Unknown routes answer 404.
    Every request is recorded, so tests can assert on what was sent
    or that nothing was sent at all.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any, Optional[Exception]]] = {}
        self.requests: list[httpx.Request] = []

    def on(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.routes[(method.upper(), path)] = (status, json, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        status, body, error = route
        if error is not None:
            raise error
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method.upper() and r.url.path == path]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset module singletons and cached settings around each test."""
    get_settings.cache_clear()
    reset_api_client()
    reset_session_service()
    reset_blob_storage_service()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_api_client()
    reset_session_service()
    reset_blob_storage_service()
    reset_client_cache()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def notifier() -> SessionNotifier:
    return SessionNotifier()


@pytest.fixture
def store(storage: InMemoryStorage, notifier: SessionNotifier, clock: FakeClock) -> SessionStore:
    """Session store on in-memory storage with a controllable clock."""
    return SessionStore(storage=storage, notifier=notifier, clock=clock, cache_ttl=1.0)


@pytest.fixture
def backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def api(backend: MockBackend) -> ApiClient:
    """API client wired to the stub backend."""
    return ApiClient(
        base_url=TEST_API_URL,
        http_client=httpx.AsyncClient(transport=backend.transport),
    )


@pytest.fixture
def user_data() -> dict:
    """A stored user as the backend returns it."""
    return {
        "id": 1,
        "fullName": "Ada",
        "email": "ada@x.com",
        "role": "student",
        "isVerified": True,
    }
