from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from request_log.application.ports.http import Formatter, TokenResolver
from request_log.application.ports.sink import Sink
from request_log.domain.value_objects.enums import ALL_TOKENS, StandardToken


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """Request logger configuration.

    ``format`` is either a template string compiled once, a prebuilt
    formatter, or ``None`` (the sink then receives ``None`` as the message).
    """

    log: Sink
    format: str | Formatter | None = None
    custom_tokens: Mapping[str, TokenResolver] | None = None
    standard_tokens: tuple[StandardToken, ...] = ALL_TOKENS
