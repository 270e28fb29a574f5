"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_forward, handle_preflight
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.forwarding import ForwardingService
from services.upstream import UpstreamClient

FORWARDED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            follow_redirects=True,
            transport=transport,
        )
        app.state.upstream_client = UpstreamClient(client)
        app.state.forwarding_service = ForwardingService(
            config=config,
            header_builder=HeaderBuilder(config.upstream.username, config.upstream.password),
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Agent Chat Proxy", version="0.1.0", lifespan=lifespan)
    route = config.proxy.route_marker + "{path:path}"

    @app.options(route)
    async def proxy_preflight():
        return await handle_preflight()

    @app.api_route(route, methods=FORWARDED_METHODS)
    async def proxy_upstream(request: Request):
        return await handle_forward(request, config, logger)

    return app
