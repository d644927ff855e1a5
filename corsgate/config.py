"""Environment-driven configuration for the CORS gateway."""

from __future__ import annotations

import os

from .policy import CorsPolicy


def _parse_origins(raw: str | None) -> list[str]:
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


def load_policy() -> CorsPolicy:
    """Build the CORS policy from the current ``ALLOWED_ORIGINS`` value.

    An unset or blank value yields the allow-all policy.
    """

    return CorsPolicy.from_iterable(_parse_origins(os.getenv("ALLOWED_ORIGINS")))


__all__ = ["load_policy"]
