from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable


class LifecycleState(StrEnum):
    IDLE = "idle"
    TIMING = "timing"
    FINISHED = "finished"
    CLOSED = "closed"
    LOGGED = "logged"


@dataclass(slots=True)
class LifecycleRecord:
    """Per-request tracking state: start time plus both terminal listeners."""

    start_ns: int | None = None
    on_finish: Callable[[], None] | None = None
    on_close: Callable[[], None] | None = None
    state: LifecycleState = LifecycleState.IDLE

    @property
    def is_terminal(self) -> bool:
        return self.state in (
            LifecycleState.FINISHED,
            LifecycleState.CLOSED,
            LifecycleState.LOGGED,
        )

    def start(self, start_ns: int) -> None:
        self.start_ns = start_ns
        self.state = LifecycleState.TIMING

    def terminate(self, finished: bool) -> None:
        self.state = LifecycleState.FINISHED if finished else LifecycleState.CLOSED

    def mark_logged(self) -> None:
        self.state = LifecycleState.LOGGED
        self.on_finish = None
        self.on_close = None
