from __future__ import annotations

import logging
from typing import Any

DEFAULT_ACCESS_LOGGER = "request_log.access"


class LoggingSink:
    """Implements application.ports.sink.Sink on top of a stdlib logger."""

    def __init__(self, logger_name: str = DEFAULT_ACCESS_LOGGER, level: int | str = logging.INFO) -> None:
        self._logger = logging.getLogger(logger_name)
        self._level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        if not isinstance(self._level, int):
            raise ValueError(f"unknown log level: {level!r}")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def __call__(
        self,
        message: str | None,
        request: Any,
        response: Any,
        duration: str,
        finished: bool,
    ) -> None:
        if message is None:
            return
        self._logger.log(self._level, "%s", message)
