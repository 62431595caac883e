from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from starlette.types import Scope

from dashboard.observability.middleware import (
    register_request_middleware,
    unhandled_exception_handler,
)


def _build_app():
    app = FastAPI()
    register_request_middleware(app)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    return app


def test_request_context_adds_request_id_header():
    app = _build_app()

    @app.get("/ok")
    def ok_route():
        return {"ok": True}

    client = TestClient(app)
    resp = client.get("/ok")
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-Id")

    resp = client.get("/ok", headers={"X-Request-Id": "given-id"})
    assert resp.headers["X-Request-Id"] == "given-id"


def test_unhandled_exception_returns_envelope_with_request_id():
    scope: Scope = {"type": "http", "method": "GET", "path": "/", "headers": []}
    request = Request(scope)
    request.state.request_id = "abc-123"
    response = unhandled_exception_handler(request, RuntimeError("boom"))
    assert response.status_code == 500
    assert b"INTERNAL_ERROR" in response.body
    assert b"abc-123" in response.body
    assert response.headers["X-Request-Id"] == "abc-123"


def test_route_failure_is_rendered_as_500_envelope():
    app = _build_app()

    @app.get("/boom")
    def boom():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/boom")
    assert resp.status_code == 500
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "INTERNAL_ERROR"
