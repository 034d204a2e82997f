from __future__ import annotations

import json
import threading
from typing import Any, Callable

import httpx


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to handle."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

        def _record(request: httpx.Request) -> httpx.Response:
            with self._lock:
                self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_response(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return _handler


def text_response(body: str, status_code: int) -> Callable[[httpx.Request], httpx.Response]:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return _handler


def recording_client(handler: Callable[[httpx.Request], httpx.Response]) -> tuple[httpx.Client, RecordingTransport]:
    transport = RecordingTransport(handler)
    return httpx.Client(transport=transport), transport
