import json
from typing import Any

import httpx
import pytest
import structlog

from mojangid.config import Settings
from mojangid.resolver import AsyncMojangClient, MojangClient


class FakeMojang:
    """Stands in for api.mojang.com: queued responses out, recorded requests in."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Any] = []

    def respond(
        self,
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
        stream: httpx.SyncByteStream | httpx.AsyncByteStream | None = None,
    ) -> None:
        if stream is not None:
            self._responses.append(httpx.Response(status_code, stream=stream))
        elif content is not None:
            self._responses.append(httpx.Response(status_code, content=content))
        elif json_body is not None:
            self._responses.append(httpx.Response(status_code, json=json_body))
        else:
            self._responses.append(httpx.Response(status_code))

    def fail_with(self, exc_type: type[httpx.TransportError], message: str = "boom") -> None:
        self._responses.append((exc_type, message))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self._responses.pop(0)
        if isinstance(outcome, tuple):
            exc_type, message = outcome
            raise exc_type(message, request=request)
        return outcome

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        api_base_url="https://api.mojang.com",
        request_timeout_seconds=2.0,
        user_agent="mojangid-tests/1.0",
    )


@pytest.fixture
def upstream() -> FakeMojang:
    return FakeMojang()


@pytest.fixture
def mojang(test_settings: Settings, upstream: FakeMojang) -> MojangClient:
    return MojangClient(test_settings, transport=httpx.MockTransport(upstream))


@pytest.fixture
def async_mojang(test_settings: Settings, upstream: FakeMojang) -> AsyncMojangClient:
    return AsyncMojangClient(test_settings, transport=httpx.MockTransport(upstream))


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TrackingStream(httpx.SyncByteStream):
    """Response body that records whether it was closed; may fail mid-read."""

    def __init__(self, body: bytes, fail_after_first: bool = False) -> None:
        self._body = body
        self._fail = fail_after_first
        self.closed = False

    def __iter__(self):
        yield self._body
        if self._fail:
            raise httpx.ReadError("connection reset mid-body")

    def close(self) -> None:
        self.closed = True


class AsyncTrackingStream(httpx.AsyncByteStream):
    def __init__(self, body: bytes, fail_after_first: bool = False) -> None:
        self._body = body
        self._fail = fail_after_first
        self.closed = False

    async def __aiter__(self):
        yield self._body
        if self._fail:
            raise httpx.ReadError("connection reset mid-body")

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def tracking_stream() -> type[TrackingStream]:
    return TrackingStream


@pytest.fixture
def async_tracking_stream() -> type[AsyncTrackingStream]:
    return AsyncTrackingStream
