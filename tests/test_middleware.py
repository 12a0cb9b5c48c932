import asyncio

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from readyread_api.app.core.errors import install_exception_handlers
from readyread_api.app.core.middleware import RequestTimeoutMiddleware


def build_app(write_timeout):
    app = FastAPI()
    app.add_middleware(RequestTimeoutMiddleware, read_timeout=1, write_timeout=write_timeout)
    install_exception_handlers(app)

    @app.get("/slow")
    async def slow():
        await asyncio.sleep(2)
        return {"done": True}

    @app.get("/fast")
    async def fast():
        return {"done": True}

    return app


def test_fast_response_passes_through():
    with TestClient(build_app(write_timeout=1)) as client:
        response = client.get("/fast")
    assert response.status_code == 200
    assert response.json() == {"done": True}


def test_slow_response_gets_503_envelope():
    with TestClient(build_app(write_timeout=0.05)) as client:
        response = client.get("/slow")
    assert response.status_code == 503
    assert response.json() == {
        "message": "request timed out",
        "developerMessage": "the server did not produce a response in time",
        "code": 503,
    }


def test_stalled_body_raises_408():
    async def inner(scope, receive, send):
        await receive()

    async def stalled_receive():
        await asyncio.sleep(1)
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message):
        pass

    middleware = RequestTimeoutMiddleware(inner, read_timeout=0.05, write_timeout=5)
    scope = {"type": "http", "method": "POST", "path": "/api/authors"}
    with pytest.raises(HTTPException) as exc:
        asyncio.run(middleware(scope, stalled_receive, send))
    assert exc.value.status_code == 408


def test_non_http_scopes_are_untouched():
    seen = []

    async def inner(scope, receive, send):
        seen.append(scope["type"])

    middleware = RequestTimeoutMiddleware(inner, read_timeout=0, write_timeout=0)
    asyncio.run(middleware({"type": "lifespan"}, None, None))
    assert seen == ["lifespan"]
