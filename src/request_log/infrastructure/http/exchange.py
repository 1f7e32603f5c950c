"""ASGI adapters exposing a request and an observable response to the logger."""
from __future__ import annotations

import logging
from typing import Callable

from starlette.datastructures import Headers, State
from starlette.requests import Request
from starlette.types import Scope

from request_log.domain.value_objects.enums import LifecycleEvent

logger = logging.getLogger(__name__)

Listener = Callable[[], None]

_ENCRYPTED_SCHEMES = frozenset({"https", "wss"})


class HttpRequest:
    """Read-only view over an ASGI ``http`` scope."""

    def __init__(self, scope: Scope) -> None:
        self.request = Request(scope)

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def path(self) -> str:
        return self.request.url.path

    @property
    def query_string(self) -> str:
        return self.request.url.query

    @property
    def encrypted(self) -> bool:
        return self.request.url.scheme in _ENCRYPTED_SCHEMES

    @property
    def headers(self) -> Headers:
        return self.request.headers

    @property
    def client(self) -> str | None:
        client = self.request.client
        return client.host if client else None

    @property
    def state(self) -> State:
        return self.request.state


class HttpResponse:
    """Response status and headers plus one-shot ``finish``/``close`` events."""

    def __init__(self) -> None:
        self.status_code: int | None = None
        self.headers: Headers = Headers()
        self.finished = False
        self.closed = False
        self._listeners: dict[str, list[Listener]] = {}

    def get_header(self, name: str) -> str | None:
        return self.headers.get(name)

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(str(event), []).append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        listeners = self._listeners.get(str(event))
        if listeners and listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(str(event), ()))

    def emit(self, event: str) -> None:
        for listener in list(self._listeners.get(str(event), ())):
            listener()

    def start(self, status: int, raw_headers: list[tuple[bytes, bytes]] | None = None) -> None:
        self.status_code = status
        self.headers = Headers(raw=[(key.lower(), value) for key, value in raw_headers or ()])

    def finish(self) -> None:
        if self.finished or self.closed:
            return
        self.finished = True
        self.emit(LifecycleEvent.FINISH)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if not self.finished:
            logger.debug("Response closed before finishing (status=%s)", self.status_code)
        self.emit(LifecycleEvent.CLOSE)

    def __repr__(self) -> str:
        return f"HttpResponse(status_code={self.status_code!r}, finished={self.finished})"
