"""Compile ``:token`` access-log templates into reusable formatters.

A template is literal text with ``:name`` placeholders. Compilation splits the
template once on the recognized names; formatting afterwards only walks the
resulting chunks and resolves each token reference.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from request_log.application.exceptions import MissingResolverError
from request_log.application.ports.clock import Clock, SystemClock
from request_log.application.ports.http import RequestView, ResponseView, TokenResolver
from request_log.domain.entities.template import (
    CustomTokenRef,
    StandardTokenRef,
    TemplateProgram,
    TokenRef,
)
from request_log.domain.value_objects.enums import ALL_TOKENS, StandardToken

logger = logging.getLogger(__name__)

StandardResolver = Callable[[Any, Any, str, bool, Clock], Any]


def _iso_time(clock: Clock) -> str:
    return clock.now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


_STANDARD_RESOLVERS: dict[StandardToken, StandardResolver] = {
    StandardToken.STATUS_CODE: lambda req, res, duration, finished, clock: res.status_code,
    StandardToken.DURATION: lambda req, res, duration, finished, clock: duration,
    StandardToken.PROTO: lambda req, res, duration, finished, clock: (
        "https" if req.encrypted else "http"
    ),
    StandardToken.METHOD: lambda req, res, duration, finished, clock: req.method,
    StandardToken.PATH: lambda req, res, duration, finished, clock: req.path,
    StandardToken.ISO_TIME: lambda req, res, duration, finished, clock: _iso_time(clock),
    StandardToken.CONTENT_TYPE: lambda req, res, duration, finished, clock: (
        res.get_header("content-type")
    ),
    StandardToken.CONTENT_LENGTH: lambda req, res, duration, finished, clock: (
        res.get_header("content-length")
    ),
}


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def build_token_pattern(names: Iterable[str]) -> re.Pattern[str] | None:
    """Alternation of ``:name`` for every name, in the given order."""
    alternatives = "|".join(re.escape(name) for name in names)
    if not alternatives:
        return None
    return re.compile(f":({alternatives})")


def parse_template(
    template: str,
    custom_names: Iterable[str] = (),
    *,
    standard_tokens: Iterable[StandardToken] = ALL_TOKENS,
) -> TemplateProgram:
    standard = [StandardToken(token) for token in standard_tokens]
    standard_names = {token.value for token in standard}
    names = [token.value for token in standard]
    names.extend(name for name in custom_names if name and name not in standard_names)

    pattern = build_token_pattern(names)
    if pattern is None:
        return TemplateProgram(chunks=(template,), tokens=())

    parts = pattern.split(template)
    chunks: list[str] = parts[0::2]
    tokens: list[TokenRef] = [
        StandardTokenRef(StandardToken(name)) if name in standard_names else CustomTokenRef(name)
        for name in parts[1::2]
    ]
    return TemplateProgram(chunks=tuple(chunks), tokens=tuple(tokens))


class CompiledTemplate:
    """A formatter: ``(request, response, duration, finished) -> str``."""

    __slots__ = ("template", "program", "_custom_tokens", "_clock")

    def __init__(
        self,
        template: str,
        program: TemplateProgram,
        custom_tokens: Mapping[str, TokenResolver] | None,
        clock: Clock,
    ) -> None:
        self.template = template
        self.program = program
        self._custom_tokens = custom_tokens if custom_tokens is not None else {}
        self._clock = clock

    def __call__(self, request: RequestView, response: ResponseView, duration: str, finished: bool) -> str:
        chunks = self.program.chunks
        tokens = self.program.tokens
        if not tokens:
            return chunks[0]

        out: list[str] = []
        for i, chunk in enumerate(chunks):
            out.append(chunk)
            if i < len(tokens):
                out.append(_render(self._resolve(tokens[i], request, response, duration, finished)))
        return "".join(out)

    def _resolve(
        self,
        token: TokenRef,
        request: Any,
        response: Any,
        duration: str,
        finished: bool,
    ) -> Any:
        if isinstance(token, StandardTokenRef):
            return _STANDARD_RESOLVERS[token.kind](request, response, duration, finished, self._clock)

        resolver = self._custom_tokens.get(token.name)
        if resolver is None:
            raise MissingResolverError(token.name)
        return resolver(request, response, duration, finished)

    def __repr__(self) -> str:
        return f"CompiledTemplate({self.template!r})"


def compile_template(
    template: str,
    custom_tokens: Mapping[str, TokenResolver] | None = None,
    *,
    standard_tokens: Iterable[StandardToken] = ALL_TOKENS,
    clock: Clock | None = None,
) -> CompiledTemplate:
    """Compile ``template`` once; the result can be invoked for every request.

    Standard names take precedence over custom names and are tried first in
    the alternation. ``custom_tokens`` is kept by reference, so a resolver
    removed after compilation fails loudly at format time.
    """
    program = parse_template(
        template,
        custom_tokens.keys() if custom_tokens else (),
        standard_tokens=standard_tokens,
    )
    logger.debug(
        "Compiled access log template %r (%d tokens)",
        template,
        len(program.tokens),
    )
    return CompiledTemplate(template, program, custom_tokens, clock or SystemClock())
