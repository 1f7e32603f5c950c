"""Access log middleware against a real FastAPI app and raw ASGI flows."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from request_log.api.middleware.access_log import AccessLogMiddleware
from request_log.app import create_app
from request_log.application.dto.logger_config import LoggerConfig
from request_log.config import Settings
from request_log.services.request_logger import create_request_logger
from tests.conftest import FakeClock, RecordingSink


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def client(sink):
    settings = Settings(ACCESS_LOG_FORMAT=":proto :method :path :status-code :content-type rid=:request-id")
    return TestClient(create_app(settings, sink=sink), raise_server_exceptions=False)


def test_healthz_is_logged_once(client, sink):
    resp = client.get("/healthz?verbose=1", headers={"X-Request-ID": "abc123"})

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "abc123"
    assert sink.messages == ["http GET /healthz 200 application/json rid=abc123"]
    assert sink.calls[0][4] is True


def test_not_found_is_logged(client, sink):
    resp = client.get("/missing")

    assert resp.status_code == 404
    assert len(sink.calls) == 1
    message = sink.messages[0]
    assert message.startswith("http GET /missing 404 application/json rid=")
    assert message.removeprefix("http GET /missing 404 application/json rid=") == resp.headers["X-Request-ID"]


def test_default_format(sink):
    client = TestClient(create_app(Settings(), sink=sink))
    client.get("/healthz")

    assert len(sink.messages) == 1
    assert sink.messages[0].startswith("GET /healthz - 200 in ")
    assert sink.messages[0].endswith("ms")


def test_disabled_access_log(sink):
    client = TestClient(create_app(Settings(ACCESS_LOG_ENABLED=False), sink=sink))
    assert client.get("/healthz").status_code == 200
    assert sink.calls == []


def _http_scope(path: str = "/stream") -> dict:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": [],
        "client": ("127.0.0.1", 50000),
        "server": ("testserver", 80),
    }


def _middleware(app, sink, clock):
    request_logger = create_request_logger(
        LoggerConfig(log=sink, format=":method :path :status-code :duration"),
        clock=clock,
    )
    return AccessLogMiddleware(app, request_logger=request_logger)


@pytest.mark.asyncio
async def test_client_disconnect_logs_closed_once():
    sink, clock = RecordingSink(), FakeClock()

    async def app(scope, receive, send):
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"partial", "more_body": True})
        clock.advance(1_500_000_000)
        message = await receive()
        assert message["type"] == "http.disconnect"

    async def receive():
        return {"type": "http.disconnect"}

    async def send(message):
        pass

    await _middleware(app, sink, clock)(_http_scope(), receive, send)

    assert len(sink.calls) == 1
    message, request, response, duration, finished = sink.calls[0]
    assert message == "GET /stream 200 1sec 500.000ms"
    assert duration == "1sec 500.000ms"
    assert finished is False
    assert request.path == "/stream"
    assert response.closed and not response.finished


@pytest.mark.asyncio
async def test_app_exception_logs_closed_and_propagates():
    sink, clock = RecordingSink(), FakeClock()

    async def app(scope, receive, send):
        raise RuntimeError("handler failed")

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message):
        pass

    with pytest.raises(RuntimeError, match="handler failed"):
        await _middleware(app, sink, clock)(_http_scope("/boom"), receive, send)

    assert sink.messages == ["GET /boom  0.00000ms"]
    assert sink.calls[0][4] is False


@pytest.mark.asyncio
async def test_app_exception_wins_over_failing_sink(caplog):
    clock = FakeClock()
    calls = []

    def failing_sink(message, request, response, duration, finished):
        calls.append((message, finished))
        raise ValueError("sink failed")

    async def app(scope, receive, send):
        raise RuntimeError("handler failed")

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message):
        pass

    with pytest.raises(RuntimeError, match="handler failed"):
        await _middleware(app, failing_sink, clock)(_http_scope("/boom"), receive, send)

    assert calls == [("GET /boom  0.00000ms", False)]
    assert any(
        record.exc_info and isinstance(record.exc_info[1], ValueError)
        for record in caplog.records
    )


@pytest.mark.asyncio
async def test_non_http_scopes_pass_through():
    sink, clock = RecordingSink(), FakeClock()
    seen = []

    async def app(scope, receive, send):
        seen.append(scope["type"])

    async def receive():
        return {"type": "lifespan.startup"}

    async def send(message):
        pass

    await _middleware(app, sink, clock)({"type": "lifespan"}, receive, send)

    assert seen == ["lifespan"]
    assert sink.calls == []
