from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from authkit import __version__
from authkit.api.middleware.exception_handlers import register_exception_handlers
from authkit.api.middleware.request_context import RequestContextMiddleware
from authkit.api.routes import health
from authkit.api.routes.v1 import router as v1_router
from authkit.core.authkit import AuthKit
from authkit.core.constants import get_settings
from authkit.core.exceptions import ConfigurationError
from authkit.utils.client_factory import create_http_client
from authkit.utils.logger import logger


def create_app(authkit: AuthKit | None = None) -> FastAPI:
    """Build the embed token service.

    Args:
        authkit: Client to serve with. When omitted one is built at startup
            from the ``secret`` and ``base_url`` settings, sharing a single
            HTTP client for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if authkit is not None:
            app.state.authkit = authkit
            yield
            return

        settings = get_settings()
        if not settings.secret:
            raise ConfigurationError("AUTHKIT_SECRET must be set to run the embed token service")

        http_client = create_http_client(
            enable_logging=settings.http_request_logging,
            connect_timeout=settings.http_connect_timeout,
            read_timeout=settings.http_read_timeout,
        )
        app.state.authkit = AuthKit(settings.secret, {"base_url": settings.base_url}, http_client=http_client)
        logger.info(f"Embed token service ready (base_url={settings.base_url})")

        try:
            yield
        finally:
            await http_client.aclose()
            logger.info("Embed token service stopped")

    app = FastAPI(title="AuthKit", version=__version__, lifespan=lifespan)

    # Setting state here too keeps the app usable without running lifespan
    if authkit is not None:
        app.state.authkit = authkit

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router, prefix="/v1")

    return app
