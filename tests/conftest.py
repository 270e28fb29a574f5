"""Shared fixtures for proxy tests."""

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, UpstreamSettings

UPSTREAM_URL = "https://backend.example"


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self):
        self.forwards: list[tuple[str, str, str]] = []
        self.responses: list[tuple[str, str, int]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_forward(self, method: str, path: str, target_url: str) -> None:
        self.forwards.append((method, path, target_url))

    def log_response(self, method: str, path: str, status: int) -> None:
        self.responses.append((method, path, status))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


class RecordingUpstream:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.headers: dict[str, str] = {"content-type": "application/json"}
        self.body = b'{"ok": true}'
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            stream=httpx.ByteStream(self.body),
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def upstream():
    return RecordingUpstream()


@pytest.fixture
def make_config() -> Callable[..., Config]:
    def _make(**upstream_overrides) -> Config:
        settings = {"base_url": UPSTREAM_URL, **upstream_overrides}
        return Config(upstream=UpstreamSettings(**settings))

    return _make


@pytest.fixture
def make_client(logger, upstream, make_config):
    """Build a TestClient whose upstream is the recording mock transport."""
    clients = []

    def _make(config: Config | None = None, transport: httpx.AsyncBaseTransport | None = None) -> TestClient:
        app = create_app(
            config or make_config(),
            logger,
            transport=transport or httpx.MockTransport(upstream),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
