"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Mapping, TypeVar

import httpx
import pytest

from go2port.adapters.http_client import build_async_client
from go2port.core.config import AppSettings

T = TypeVar("T")

Route = tuple[int, bytes | str]


class RecordingTransport(httpx.MockTransport):
    """MockTransport serving canned responses keyed by full URL."""

    def __init__(self, routes: Mapping[str, Route]) -> None:
        self.routes = dict(routes)
        self.requested: list[str] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        status, body = self.routes.get(url, (404, b"Not Found"))
        if isinstance(body, str):
            body = body.encode("utf-8")
        return httpx.Response(status, content=body)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def run_http(settings: AppSettings) -> Callable[..., object]:
    """Run `fn(client)` against a RecordingTransport built from `routes`."""

    def _run(
        routes: Mapping[str, Route] | httpx.MockTransport,
        fn: Callable[[httpx.AsyncClient], Awaitable[T]],
    ) -> T:
        transport = routes if isinstance(routes, httpx.MockTransport) else RecordingTransport(routes)

        async def _go() -> T:
            async with build_async_client(settings, transport=transport) as client:
                return await fn(client)

        return asyncio.run(_go())

    return _run
