from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Assigns a request id, stores it in ``request.state`` and echoes it back."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        cid = Headers(scope=scope).get(HEADER) or uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = cid

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                MutableHeaders(scope=message)[HEADER] = cid
            await send(message)

        token = correlation_id_ctx.set(cid)
        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            correlation_id_ctx.reset(token)


def request_id_token(request: Any, response: Any, duration: str, finished: bool) -> str | None:
    """Custom ``:request-id`` token."""
    return getattr(request.state, "request_id", None)
