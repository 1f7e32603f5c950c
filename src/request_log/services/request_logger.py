from __future__ import annotations

import logging
from typing import Any

from request_log.application.dto.logger_config import LoggerConfig
from request_log.application.exceptions import ConfigurationError
from request_log.application.ports.clock import Clock, SystemClock
from request_log.application.ports.http import Formatter, ObservableResponse
from request_log.application.ports.sink import Sink
from request_log.domain.entities.lifecycle import LifecycleRecord
from request_log.domain.value_objects.duration import Duration
from request_log.domain.value_objects.enums import LifecycleEvent
from request_log.services.template_compiler import compile_template

logger = logging.getLogger(__name__)


def resolve_formatter(config: LoggerConfig, clock: Clock | None = None) -> Formatter | None:
    """Turn the configured ``format`` into a single formatter (or ``None``)."""
    fmt = config.format
    if fmt is None:
        return None
    if isinstance(fmt, str):
        return compile_template(
            fmt,
            config.custom_tokens,
            standard_tokens=config.standard_tokens,
            clock=clock,
        )
    if callable(fmt):
        return fmt
    raise ConfigurationError(
        f"format must be a template string or a callable, got {type(fmt).__name__}"
    )


class RequestLogger:
    """Times each request and logs it once, on finish or on premature close."""

    def __init__(self, sink: Sink, formatter: Formatter | None, clock: Clock) -> None:
        self._sink = sink
        self._formatter = formatter
        self._clock = clock

    @property
    def formatter(self) -> Formatter | None:
        return self._formatter

    def __call__(self, request: Any, response: ObservableResponse) -> LifecycleRecord:
        record = LifecycleRecord()
        record.start(self._clock.monotonic_ns())

        def on_finish() -> None:
            self._log(record, request, response, finished=True)

        def on_close() -> None:
            self._log(record, request, response, finished=False)

        record.on_finish = on_finish
        record.on_close = on_close
        response.on(LifecycleEvent.FINISH, on_finish)
        response.on(LifecycleEvent.CLOSE, on_close)
        return record

    def _log(
        self,
        record: LifecycleRecord,
        request: Any,
        response: ObservableResponse,
        *,
        finished: bool,
    ) -> None:
        """Log the request for the first terminal event; later events are no-ops.

        Both listeners are detached before the formatter runs, not after. A
        formatter or sink that raises still propagates to the emitter, and the
        other event can no longer log the same request a second time.
        """
        if record.is_terminal:
            return
        record.terminate(finished)

        assert record.start_ns is not None
        duration = str(Duration.between(record.start_ns, self._clock.monotonic_ns()))

        if record.on_finish is not None:
            response.remove_listener(LifecycleEvent.FINISH, record.on_finish)
        if record.on_close is not None:
            response.remove_listener(LifecycleEvent.CLOSE, record.on_close)
        record.mark_logged()

        if not finished:
            logger.debug("Connection closed before response finished after %s", duration)

        message = self._formatter(request, response, duration, finished) if self._formatter else None
        self._sink(message, request, response, duration, finished)


def create_request_logger(config: LoggerConfig, *, clock: Clock | None = None) -> RequestLogger:
    if not callable(config.log):
        raise ConfigurationError("log sink must be callable")
    clock = clock or SystemClock()
    return RequestLogger(config.log, resolve_formatter(config, clock), clock)
