"""FastAPI application serving behind the CORS filter."""

import logging

from fastapi import FastAPI

from .config import load_policy
from .logging import configure_logging
from .middleware.cors import CorsFilterMiddleware
from .middleware.logging import LoggingMiddleware
from .policy import CorsPolicy

logger = logging.getLogger("corsgate.main")


def create_app(policy: CorsPolicy | None = None) -> FastAPI:
    """Assemble the app; ``policy`` defaults to the ``ALLOWED_ORIGINS`` env var."""

    configure_logging()
    if policy is None:
        policy = load_policy()
    if policy.allows_any:
        logger.warning("ALLOWED_ORIGINS is empty; every origin will be allowed")

    app = FastAPI(title="corsgate")
    app.add_middleware(CorsFilterMiddleware, policy=policy)
    app.add_middleware(LoggingMiddleware)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
