from __future__ import annotations

from typing import Any, Protocol


class Sink(Protocol):
    def __call__(
        self,
        message: str | None,
        request: Any,
        response: Any,
        duration: str,
        finished: bool,
    ) -> None: ...
