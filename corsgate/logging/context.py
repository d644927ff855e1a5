"""Request scoped context helpers for logging."""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass

request_id_ctx_var: ContextVar[str | None] = ContextVar("request_id", default=None)
origin_ctx_var: ContextVar[str | None] = ContextVar("origin", default=None)


@dataclass
class RequestContextTokens:
    """Container storing tokens for context variables set per request."""

    request_id_token: Token[str | None]
    origin_token: Token[str | None]


def bind_request_context(request_id: str, origin: str | None = None) -> RequestContextTokens:
    """Bind request level context values and return the created tokens."""

    return RequestContextTokens(
        request_id_ctx_var.set(request_id),
        origin_ctx_var.set(origin),
    )


def reset_request_context(tokens: RequestContextTokens) -> None:
    """Reset request scoped context variables using the provided tokens."""

    request_id_ctx_var.reset(tokens.request_id_token)
    origin_ctx_var.reset(tokens.origin_token)
