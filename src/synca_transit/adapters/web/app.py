"""Starlette application serving the transit API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import aiohttp
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import Response
from starlette.routing import Route

from synca_transit.adapters.web.pollers import DelayAlertPoller
from synca_transit.adapters.web.rate_limit_middleware import RateLimitMiddleware
from synca_transit.adapters.web.routes import routes as api_routes
from synca_transit.adapters.web.services import TransitServices, build_services

if TYPE_CHECKING:
    from synca_transit.adapters.config import AppConfig

logger = logging.getLogger(__name__)


async def healthz(_request: Any) -> Response:
    """Health check endpoint for load balancers and monitoring."""
    return Response(content="Ok", media_type="text/plain")


async def _start_poller(services: TransitServices, config: AppConfig) -> DelayAlertPoller | None:
    if services.alert_service is None:
        logger.info("Delay alerts disabled (no Discord webhook configured)")
        return None
    poller = DelayAlertPoller(services.alert_service, config.delay_alert_interval_seconds)
    await poller.start()
    return poller


def create_app(
    config: AppConfig,
    services: TransitServices | None = None,
    start_pollers: bool = True,
) -> Starlette:
    """Build the application.

    Args:
        config: Application configuration.
        services: Pre-built services. When omitted, the lifespan opens an
            aiohttp session and builds the live services on it.
        start_pollers: Whether the delay alert poller runs in the background.
    """

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        session: aiohttp.ClientSession | None = None
        if services is None:
            session = aiohttp.ClientSession()
            app.state.services = build_services(config, session)
        else:
            app.state.services = services

        poller = await _start_poller(app.state.services, config) if start_pollers else None
        try:
            yield
        finally:
            if poller is not None:
                await poller.stop()
            if session is not None:
                await session.close()
            logger.info("Transit API shut down")

    app = Starlette(
        routes=[*api_routes, Route("/healthz", healthz, methods=["GET"])],
        middleware=[
            Middleware(RateLimitMiddleware, requests_per_minute=config.rate_limit_per_minute)
        ],
        lifespan=lifespan,
    )
    app.state.config = config
    return app
