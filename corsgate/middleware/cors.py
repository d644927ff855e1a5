"""Middleware that runs the CORS take in front of a Starlette application."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse
from starlette.types import ASGIApp

from ..cors import CorsFilter
from ..headers import split_header
from ..http import Request, Response
from ..policy import CorsPolicy


def canonical_header_name(name: str) -> str:
    """Render an ASGI (lower-cased) header name the way it appears on the wire."""

    return "-".join(part.capitalize() for part in name.split("-"))


def _header_lines(raw_headers: list[tuple[bytes, bytes]]) -> tuple[str, ...]:
    return tuple(
        f"{canonical_header_name(name.decode('latin-1'))}: {value.decode('latin-1')}"
        for name, value in raw_headers
    )


def request_from_starlette(request: StarletteRequest) -> Request:
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    version = request.scope.get("http_version", "1.1")
    request_line = f"{request.method} {target} HTTP/{version}"
    return Request(head=(request_line, *_header_lines(request.headers.raw)))


def response_to_starlette(response: Response) -> StarletteResponse:
    result = StarletteResponse(content=response.body, status_code=response.status)
    raw_headers: list[tuple[bytes, bytes]] = []
    for line in response.headers:
        parsed = split_header(line)
        if parsed is None:
            continue
        name, value = parsed
        raw_headers.append((name.encode("latin-1"), value.encode("latin-1")))
    result.raw_headers = raw_headers
    return result


class _DownstreamTake:
    """Take backed by the rest of the ASGI stack."""

    def __init__(self, request: StarletteRequest, call_next: RequestResponseEndpoint) -> None:
        self._request = request
        self._call_next = call_next

    async def act(self, request: Request) -> Response:
        downstream = await self._call_next(self._request)
        chunks = [chunk async for chunk in downstream.body_iterator]  # type: ignore[attr-defined]
        body = b"".join(
            chunk if isinstance(chunk, bytes) else chunk.encode("utf-8") for chunk in chunks
        )
        return Response(
            status=downstream.status_code,
            headers=_header_lines(downstream.raw_headers),
            body=body,
        )


class CorsFilterMiddleware(BaseHTTPMiddleware):
    """Apply the CORS policy to every request served by the wrapped app."""

    def __init__(self, app: ASGIApp, policy: CorsPolicy | None = None) -> None:
        super().__init__(app)
        self.policy = policy if policy is not None else CorsPolicy()

    async def dispatch(self, request, call_next):  # type: ignore[override]
        take = CorsFilter(_DownstreamTake(request, call_next), self.policy)
        response = await take.act(request_from_starlette(request))
        return response_to_starlette(response)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(policy={self.policy!r})"


__all__ = [
    "CorsFilterMiddleware",
    "canonical_header_name",
    "request_from_starlette",
    "response_to_starlette",
]
