"""Shared fakes for executor and client tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

ResponseFactory = Callable[[], httpx.Response]

RATE_HEADERS = {
    "x-ratelimit-limit": "5000",
    "x-ratelimit-remaining": "4999",
    "x-ratelimit-used": "1",
}


class ScriptedServer:
    """Hands out one scripted response per request, repeating the last one.

    Items are zero-argument callables returning a fresh ``httpx.Response``
    or exceptions to raise from the transport.
    """

    def __init__(self, *items: ResponseFactory | Exception) -> None:
        self.items = list(items)
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.items[min(len(self.requests), len(self.items)) - 1]
        if isinstance(item, Exception):
            raise item
        response = item()
        self.responses.append(response)
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def calls(self) -> int:
        return len(self.requests)


def _streamed(status: int, body: Any, headers: dict[str, str]) -> httpx.Response:
    # Unread stream, so tests can check the client closes it.
    content = b"" if body is None else json.dumps(body).encode()
    if body is not None:
        headers = dict(headers, **{"content-type": "application/json"})
    return httpx.Response(status, headers=headers, stream=httpx.ByteStream(content))


def ok(body: Any = None, status: int = 200, **headers: str) -> ResponseFactory:
    def factory() -> httpx.Response:
        hdrs = dict(RATE_HEADERS, **headers)
        return _streamed(status, body, hdrs)

    return factory


def failing(
    status: int,
    *,
    remaining: int | None = None,
    reset: int | None = None,
    message: str = "error",
    **headers: str,
) -> ResponseFactory:
    def factory() -> httpx.Response:
        hdrs = {"x-ratelimit-limit": "60"}
        if remaining is not None:
            hdrs["x-ratelimit-remaining"] = str(remaining)
        if reset is not None:
            hdrs["x-ratelimit-reset"] = str(reset)
        hdrs.update(headers)
        return _streamed(status, {"message": message}, hdrs)

    return factory
