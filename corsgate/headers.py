"""Case-insensitive, multi-valued index over raw header lines."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .http import Request, Response

HeaderIndex = Mapping[str, tuple[str, ...]]


def split_header(line: str) -> tuple[str, str] | None:
    name, sep, value = line.partition(":")
    if not sep or not name or any(ch.isspace() for ch in name):
        return None
    return name.lower(), value.strip()


def header_index(lines: Iterable[str]) -> dict[str, tuple[str, ...]]:
    """Map lower-cased header names to every value seen for them.

    Values keep the order they appear in. Lines that are not ``Name: value``
    pairs (the request line, blank lines) are skipped without complaint.
    """

    collected: dict[str, list[str]] = {}
    for line in lines:
        parsed = split_header(line)
        if parsed is None:
            continue
        name, value = parsed
        collected.setdefault(name, []).append(value)
    return {name: tuple(values) for name, values in collected.items()}


def headers_of(subject: Request | Response) -> dict[str, tuple[str, ...]]:
    """Index the header lines of a request or a response."""

    if isinstance(subject, Response):
        return header_index(subject.headers)
    return header_index(subject.head)


def request_headers(request: Request) -> dict[str, tuple[str, ...]]:
    return header_index(request.head)


def response_headers(response: Response) -> dict[str, tuple[str, ...]]:
    return header_index(response.headers)


__all__ = [
    "HeaderIndex",
    "header_index",
    "headers_of",
    "request_headers",
    "response_headers",
    "split_header",
]
