"""Request/response logging middleware that emits structured JSON logs."""

from __future__ import annotations

import logging
import time
import traceback
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from ..logging import bind_request_context, reset_request_context
from ..logging.formatter import SERVICE_NAME


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emit ECS compatible JSON access logs for every request."""

    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("corsgate.access")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_ns = time.perf_counter_ns()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        tokens = bind_request_context(
            request_id=request_id, origin=request.headers.get("Origin")
        )

        status_code = 500
        error_type: str | None = None
        error_message: str | None = None
        error_stack: str | None = None

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as exc:  # noqa: BLE001 - log unexpected errors
            error_type = type(exc).__name__
            error_message = str(exc)
            error_stack = "".join(
                traceback.format_exception(exc.__class__, exc, exc.__traceback__)
            )
            raise
        finally:
            duration_ns = time.perf_counter_ns() - start_ns

            log_level = logging.INFO
            if status_code >= 500:
                log_level = logging.ERROR
            elif status_code >= 400:
                log_level = logging.WARNING

            extra = {
                "http_request_method": request.method,
                "url_path": request.url.path,
                "url_query": request.url.query or None,
                "http_status_code": status_code,
                "event_duration": duration_ns,
                "user_agent": request.headers.get("User-Agent") or None,
                "event_dataset": f"{SERVICE_NAME}.access",
            }
            if error_type:
                extra["error_type"] = error_type
            if error_message:
                extra["error_message"] = error_message
            if error_stack:
                extra["error_stack"] = error_stack

            self.logger.log(
                log_level,
                f"{request.method} {request.url.path} -> {status_code}",
                extra=extra,
            )
            reset_request_context(tokens)


__all__ = ["LoggingMiddleware"]
