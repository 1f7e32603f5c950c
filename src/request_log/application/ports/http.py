"""Shapes of the request/response objects the formatter and logger consume."""
from __future__ import annotations

from typing import Any, Callable, Protocol


class RequestView(Protocol):
    method: str
    path: str
    encrypted: bool


class ResponseView(Protocol):
    status_code: int | None

    def get_header(self, name: str) -> str | None: ...


class ObservableResponse(ResponseView, Protocol):
    def on(self, event: str, listener: Callable[[], None]) -> None: ...

    def remove_listener(self, event: str, listener: Callable[[], None]) -> None: ...


class Formatter(Protocol):
    def __call__(
        self,
        request: Any,
        response: Any,
        duration: str,
        finished: bool,
    ) -> str: ...


TokenResolver = Callable[[Any, Any, str, bool], Any]
