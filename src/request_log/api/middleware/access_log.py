"""Pure ASGI access-log middleware.

The response counts as finished once the last body chunk has been handed to
the server. A client disconnect, an exception or the app returning without a
complete body counts as a premature close.
"""
from __future__ import annotations

import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from request_log.infrastructure.http.exchange import HttpRequest, HttpResponse
from request_log.services.request_logger import RequestLogger

logger = logging.getLogger(__name__)


class AccessLogMiddleware:
    def __init__(self, app: ASGIApp, request_logger: RequestLogger) -> None:
        self.app = app
        self.request_logger = request_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = HttpRequest(scope)
        response = HttpResponse()
        self.request_logger(request, response)

        async def receive_wrapper() -> Message:
            message = await receive()
            if message["type"] == "http.disconnect":
                response.close()
            return message

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response.start(message["status"], message.get("headers"))
            await send(message)
            if message["type"] == "http.response.body" and not message.get("more_body", False):
                response.finish()

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        except BaseException:
            try:
                response.close()
            except Exception:
                logger.exception("Access log failed while the application was raising")
            raise
        response.close()
