"""Logging filters that enrich records."""

from __future__ import annotations

import logging

from .context import origin_ctx_var, request_id_ctx_var


class RequestContextFilter(logging.Filter):
    """Attach request scoped context variables to log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        request_id = request_id_ctx_var.get(None)
        if request_id:
            record.request_id = request_id
        origin = origin_ctx_var.get(None)
        if origin and not getattr(record, "origin", None):
            record.origin = origin
        return True
