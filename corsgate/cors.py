"""CORS take.

Checks the ``Origin`` of a request against a :class:`~corsgate.policy.CorsPolicy`
before handing it to the wrapped take. See https://www.w3.org/TR/cors/ and
RFC 6454 for the protocol itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from starlette import status

from .http import Request, Response, Take, with_headers, with_status
from .policy import CorsPolicy

logger = logging.getLogger("corsgate.cors")

ORIGIN_PREFIX = "Origin:"
ALLOWED_METHODS = "OPTIONS, GET, PUT, POST, DELETE, HEAD"


def find_origin(lines: Iterable[str]) -> str | None:
    """Return the value of the first ``Origin:`` line, or ``None``.

    The prefix match is case-sensitive, unlike :func:`~corsgate.headers.header_index`.
    """

    for line in lines:
        if line.startswith(ORIGIN_PREFIX):
            return line[len(ORIGIN_PREFIX):].strip()
    return None


class CorsFilter:
    """Take that only lets allowed origins reach the wrapped take."""

    def __init__(self, take: Take, policy: CorsPolicy) -> None:
        self.take = take
        self.policy = policy

    @classmethod
    def of(cls, take: Take, *domains: str) -> "CorsFilter":
        return cls(take, CorsPolicy.of(*domains))

    async def act(self, request: Request) -> Response:
        origin = find_origin(request.head)
        if origin is None:
            logger.debug("No Origin header, passing request through")
            return await self.take.act(request)

        if not self.policy.is_allowed(origin):
            logger.info(
                "Origin %s rejected by CORS policy",
                origin,
                extra={"event_action": "cors_denied", "origin": origin},
            )
            return with_headers(
                with_status(status.HTTP_403_FORBIDDEN),
                "Access-Control-Allow-Credentials: false",
            )

        logger.debug("Origin %s allowed", origin, extra={"origin": origin})
        return with_headers(
            await self.take.act(request),
            "Access-Control-Allow-Credentials: true",
            f"Access-Control-Allow-Methods: {ALLOWED_METHODS}",
            f"Access-Control-Allow-Origin: {origin}",
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(take={self.take!r}, policy={self.policy!r})"


__all__ = ["ALLOWED_METHODS", "ORIGIN_PREFIX", "CorsFilter", "find_origin"]
