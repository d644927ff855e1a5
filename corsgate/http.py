"""Immutable request and response values plus the ``Take`` handler contract."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Protocol

from starlette import status

_DEFAULT_HEAD = ("GET / HTTP/1.1", "Host: www.example.com")


@dataclass(frozen=True)
class Request:
    """An HTTP request as its raw head lines and a body."""

    head: tuple[str, ...]
    body: bytes = b""


def fake_request(head: Iterable[str] | None = None, body: bytes | str = b"") -> Request:
    """Build a request for tests and tooling."""

    lines = tuple(head) if head is not None else _DEFAULT_HEAD
    if isinstance(body, str):
        body = body.encode("utf-8")
    return Request(head=lines, body=body)


def reason_phrase(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return "Unknown"


@dataclass(frozen=True)
class Response:
    """An HTTP response; composed by building new values, never mutated."""

    status: int = status.HTTP_200_OK
    headers: tuple[str, ...] = field(default_factory=tuple)
    body: bytes = b""

    def head(self) -> tuple[str, ...]:
        """Return the status line followed by the header lines."""

        return (f"HTTP/1.1 {self.status} {reason_phrase(self.status)}", *self.headers)


def with_headers(response: Response, *lines: str) -> Response:
    """Return ``response`` with ``lines`` appended after its own headers."""

    return replace(response, headers=(*response.headers, *lines))


def with_status(code: int, response: Response | None = None) -> Response:
    """Return ``response`` (or an empty response) carrying status ``code``."""

    if response is None:
        return Response(status=code)
    return replace(response, status=code)


class Take(Protocol):
    """Anything that turns a request into a response."""

    async def act(self, request: Request) -> Response: ...


class FixedTake:
    """Take that always answers with the same response."""

    def __init__(self, response: Response) -> None:
        self.response = response
        self.calls = 0

    async def act(self, request: Request) -> Response:
        self.calls += 1
        return self.response

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(response={self.response!r})"


__all__ = [
    "FixedTake",
    "Request",
    "Response",
    "Take",
    "fake_request",
    "reason_phrase",
    "with_headers",
    "with_status",
]
