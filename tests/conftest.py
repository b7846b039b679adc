"""Shared fixtures: an in-memory stand-in for aiohttp.ClientSession."""

from typing import Any

import pytest


class FakeResponse:
    """Async context manager shaped like an aiohttp response."""

    def __init__(
        self,
        status: int = 200,
        json_body: Any = None,
        text_body: str = "",
        headers: dict[str, str] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.status = status
        self._json = json_body
        self._text = text_body
        self.headers = headers or {}
        self._error = error
        self.reason = "OK" if status < 400 else "Error"

    async def __aenter__(self) -> "FakeResponse":
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, *_exc_info: Any) -> None:
        return None

    async def json(self, content_type: str | None = "application/json") -> Any:
        return self._json

    async def text(self) -> str:
        return self._text


class FakeSession:
    """Records requests and replays queued responses in order."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, dict[str, Any]]] = []
        self._responses: list[FakeResponse] = []

    def respond(self, **kwargs: Any) -> "FakeSession":
        self._responses.append(FakeResponse(**kwargs))
        return self

    def _next(self, method: str, url: str, kwargs: dict[str, Any]) -> FakeResponse:
        self.requests.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError(f"Unexpected {method} {url}")
        return self._responses.pop(0)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("GET", url, kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._next("POST", url, kwargs)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
