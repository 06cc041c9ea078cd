"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from clientip.api import router
from clientip.configs.config import AppConfig, get_app_config
from clientip.core.resolver import ClientIPResolver
from clientip.infra.logging import setup_logging
from clientip.infra.real_ip import STATE_RESOLVER_KEY, ClientIPMiddleware
from clientip.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = get_app_config()

    resolver = ClientIPResolver(config.client_ip)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        setup_logging(config.logging)
        logger.info(
            "Client IP headers: %s (fallback to remote addr: %s)",
            ",".join(resolver.active_headers),
            resolver.config.fallback_to_remote_addr,
        )
        yield

    app = FastAPI(
        title="clientip",
        description="Resolves the real client IP behind proxies and CDNs",
        version="0.1.0",
        lifespan=lifespan,
    )
    setattr(app.state, STATE_RESOLVER_KEY, resolver)

    app.add_middleware(ClientIPMiddleware, resolver=resolver)
    # Instrumented after our middleware so the server span wraps it.
    init_telemetry(app, config.tracing)

    app.include_router(router)

    return app


app = get_app()
