"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..client import OpenSearchClient
from ..config import config, proxy_config
from .routers import proxy, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the engine clients on startup and close them on shutdown."""
    search_client = OpenSearchClient(config)
    await search_client.start()

    upstream = httpx.AsyncClient(
        base_url=config.url,
        timeout=config.timeout,
        verify=config.verify_ssl,
    )

    # Shared per-app, handed to routers through dependencies
    app.state.search_client = search_client
    app.state.upstream = upstream
    logger.info("Forwarding %s -> %s", proxy_config.prefix, config.url)

    yield

    await upstream.aclose()
    await search_client.close()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Product Search API",
        description="Product search over OpenSearch, with a pass-through engine proxy",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Origin is mirrored back only when it is on the allow-list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=proxy_config.allowed_origins,
        allow_credentials=True,
        allow_methods=["OPTIONS", "HEAD", "GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["X-Requested-With", "Content-Type", "Content-Length", "Authorization"],
    )

    app.include_router(proxy.router, prefix=proxy_config.prefix, tags=["proxy"])
    app.include_router(search.router, tags=["search"])

    @app.get("/healthz")
    async def health_check():
        """Health check endpoint."""
        return {"ok": True}

    return app


app = create_app()
