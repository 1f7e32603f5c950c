"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import pytest


@dataclass
class FakeRequest:
    method: str = "GET"
    path: str = "/health"
    encrypted: bool = False
    user_id: str | None = None


@dataclass
class FakeResponse:
    status_code: int | None = 200
    headers: dict[str, str] = field(default_factory=dict)
    _listeners: dict[str, list[Callable[[], None]]] = field(default_factory=dict)

    def get_header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def on(self, event: str, listener: Callable[[], None]) -> None:
        self._listeners.setdefault(str(event), []).append(listener)

    def remove_listener(self, event: str, listener: Callable[[], None]) -> None:
        self._listeners[str(event)].remove(listener)

    def emit(self, event: str) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener()

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))


@dataclass
class FakeClock:
    """Deterministic clock; ``advance`` moves the monotonic counter."""

    wall: datetime = datetime(2024, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)
    ticks: int = 0

    def now(self) -> datetime:
        return self.wall

    def monotonic_ns(self) -> int:
        return self.ticks

    def advance(self, nanoseconds: int) -> None:
        self.ticks += nanoseconds


@dataclass
class RecordingSink:
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, message: str | None, request: Any, response: Any, duration: str, finished: bool) -> None:
        self.calls.append((message, request, response, duration, finished))

    @property
    def messages(self) -> list[str | None]:
        return [call[0] for call in self.calls]


@pytest.fixture
def request_stub() -> FakeRequest:
    return FakeRequest()


@pytest.fixture
def response_stub() -> FakeResponse:
    return FakeResponse()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
