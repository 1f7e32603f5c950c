from __future__ import annotations

import logging

from fastapi import FastAPI

from request_log.api.middleware.access_log import AccessLogMiddleware
from request_log.api.middleware.correlation_id import CorrelationIdMiddleware, request_id_token
from request_log.api.v1.routers import health
from request_log.application.dto.logger_config import LoggerConfig
from request_log.application.ports.sink import Sink
from request_log.config import Settings, settings as default_settings
from request_log.infrastructure.sinks.logging_sink import LoggingSink
from request_log.services.request_logger import RequestLogger, create_request_logger

logger = logging.getLogger(__name__)


def build_request_logger(settings: Settings, sink: Sink | None = None) -> RequestLogger:
    config = LoggerConfig(
        log=sink or LoggingSink(settings.ACCESS_LOG_LOGGER, settings.ACCESS_LOG_LEVEL),
        format=settings.ACCESS_LOG_FORMAT or None,
        custom_tokens={"request-id": request_id_token},
        standard_tokens=settings.standard_tokens,
    )
    return create_request_logger(config)


def create_app(settings: Settings | None = None, sink: Sink | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(
        title="Request Log Demo Service",
        version="0.1.0",
    )

    app.add_middleware(CorrelationIdMiddleware)
    if settings.ACCESS_LOG_ENABLED:
        app.add_middleware(
            AccessLogMiddleware,
            request_logger=build_request_logger(settings, sink),
        )
        logger.info("Access log enabled with format %r", settings.ACCESS_LOG_FORMAT)

    app.include_router(health.router)

    return app
