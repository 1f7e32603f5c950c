from __future__ import annotations

from enum import StrEnum


class StandardToken(StrEnum):
    STATUS_CODE = "status-code"
    DURATION = "duration"
    PROTO = "proto"
    METHOD = "method"
    PATH = "path"
    ISO_TIME = "iso-time"
    CONTENT_TYPE = "content-type"
    CONTENT_LENGTH = "content-length"


class TokenPreset(StrEnum):
    ALL = "all"
    CLASSIC = "classic"
    TIMESTAMPED = "timestamped"


class LifecycleEvent(StrEnum):
    FINISH = "finish"
    CLOSE = "close"


_BASE_TOKENS: tuple[StandardToken, ...] = (
    StandardToken.STATUS_CODE,
    StandardToken.DURATION,
    StandardToken.PROTO,
    StandardToken.METHOD,
    StandardToken.PATH,
)

CLASSIC_TOKENS: tuple[StandardToken, ...] = _BASE_TOKENS + (
    StandardToken.CONTENT_TYPE,
    StandardToken.CONTENT_LENGTH,
)
TIMESTAMPED_TOKENS: tuple[StandardToken, ...] = _BASE_TOKENS + (StandardToken.ISO_TIME,)
ALL_TOKENS: tuple[StandardToken, ...] = tuple(StandardToken)

TOKEN_PRESETS: dict[TokenPreset, tuple[StandardToken, ...]] = {
    TokenPreset.ALL: ALL_TOKENS,
    TokenPreset.CLASSIC: CLASSIC_TOKENS,
    TokenPreset.TIMESTAMPED: TIMESTAMPED_TOKENS,
}
