"""The CORS take applied to a FastAPI application through the middleware."""

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from conftest import ALLOWED_ORIGIN
from corsgate.cors import ALLOWED_METHODS
from corsgate.http import Response
from corsgate.main import create_app
from corsgate.middleware.cors import (
    CorsFilterMiddleware,
    canonical_header_name,
    response_to_starlette,
)
from corsgate.policy import CorsPolicy


@pytest.fixture
def calls():
    return []


@pytest.fixture
def client(calls):
    app = FastAPI()
    app.add_middleware(CorsFilterMiddleware, policy=CorsPolicy.of(ALLOWED_ORIGIN))

    @app.get("/items")
    async def items():  # pragma: no cover - exercised via TestClient
        calls.append("items")
        return {"items": [1, 2]}

    @app.get("/boom")
    async def boom():  # pragma: no cover - exercised via TestClient
        raise RuntimeError("explode")

    return TestClient(app)


def test_allowed_origin_gets_cors_headers(client, calls):
    response = client.get("/items", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.json() == {"items": [1, 2]}
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert response.headers["access-control-allow-credentials"] == "true"
    assert response.headers["access-control-allow-methods"] == ALLOWED_METHODS
    assert response.headers["content-type"] == "application/json"
    assert calls == ["items"]


def test_rejected_origin_never_reaches_route(client, calls):
    response = client.get("/items", headers={"Origin": "http://evil.example"})

    assert response.status_code == 403
    assert response.content == b""
    assert response.headers["access-control-allow-credentials"] == "false"
    assert "access-control-allow-origin" not in response.headers
    assert calls == []


def test_request_without_origin_is_untouched(client, calls):
    response = client.get("/items")

    assert response.status_code == 200
    assert response.json() == {"items": [1, 2]}
    assert not any(name.startswith("access-control-") for name in response.headers)
    assert calls == ["items"]


def test_route_errors_propagate(client):
    with pytest.raises(RuntimeError, match="explode"):
        client.get("/boom", headers={"Origin": ALLOWED_ORIGIN})


def test_created_app_uses_given_policy():
    client = TestClient(create_app(CorsPolicy.of("http://app.example")))

    allowed = client.get("/health", headers={"Origin": "http://app.example"})
    denied = client.get("/health", headers={"Origin": "http://other.example"})

    assert allowed.status_code == 200
    assert allowed.json() == {"status": "ok"}
    assert allowed.headers["access-control-allow-origin"] == "http://app.example"
    assert "x-request-id" in allowed.headers
    assert denied.status_code == 403


def test_canonical_header_name():
    assert canonical_header_name("origin") == "Origin"
    assert canonical_header_name("x-request-id") == "X-Request-Id"
    assert canonical_header_name("Content-TYPE") == "Content-Type"


def test_response_to_starlette_keeps_duplicates():
    converted = response_to_starlette(
        Response(status=202, headers=("Set-Cookie: a=1", "Set-Cookie: b=2"), body=b"ok")
    )

    assert converted.status_code == 202
    assert converted.body == b"ok"
    assert converted.headers.getlist("set-cookie") == ["a=1", "b=2"]
    assert "content-length" not in converted.headers


def _routes(app: FastAPI) -> FastAPI:
    @app.delete("/thing", status_code=204)
    async def delete_thing():  # pragma: no cover - exercised via TestClient
        return None

    @app.get("/text", response_class=PlainTextResponse)
    async def text():  # pragma: no cover - exercised via TestClient
        return "plain"

    return app


@pytest.fixture
def bare_client():
    return TestClient(_routes(FastAPI()))


@pytest.fixture
def wrapped_client():
    app = FastAPI()
    app.add_middleware(CorsFilterMiddleware, policy=CorsPolicy.of(ALLOWED_ORIGIN))
    return TestClient(_routes(app))


@pytest.mark.parametrize(("method", "path"), [("DELETE", "/thing"), ("GET", "/text")])
def test_pass_through_adds_no_headers(bare_client, wrapped_client, method, path):
    bare = bare_client.request(method, path)
    wrapped = wrapped_client.request(method, path)

    assert wrapped.status_code == bare.status_code
    assert wrapped.content == bare.content
    assert wrapped.headers.raw == bare.headers.raw


def test_no_content_response_keeps_no_content_length(wrapped_client):
    response = wrapped_client.delete("/thing", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 204
    assert "content-length" not in response.headers


@pytest.mark.parametrize(("method", "path"), [("DELETE", "/thing"), ("GET", "/text")])
def test_allowed_origin_adds_exactly_three_headers(bare_client, wrapped_client, method, path):
    bare = bare_client.request(method, path, headers={"Origin": ALLOWED_ORIGIN})
    wrapped = wrapped_client.request(method, path, headers={"Origin": ALLOWED_ORIGIN})

    assert wrapped.status_code == bare.status_code
    assert wrapped.headers.raw == [
        *bare.headers.raw,
        (b"access-control-allow-credentials", b"true"),
        (b"access-control-allow-methods", ALLOWED_METHODS.encode("latin-1")),
        (b"access-control-allow-origin", ALLOWED_ORIGIN.encode("latin-1")),
    ]
