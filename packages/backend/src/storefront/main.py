"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (schema, chat hub, engine).
Middleware, CORS, and routers all registered here.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from storefront import __version__
from storefront.api import api_router, root_router
from storefront.api.graphql import router as graphql_router
from storefront.config import settings
from storefront.db.engine import create_schema, engine
from storefront.middleware.request_id import RequestIdMiddleware
from storefront.realtime.hub import ChatHub
from storefront.realtime.websocket import router as ws_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. The chat hub lives exactly as long as the app does.
    """
    logger.info(
        "storefront.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.auto_create_schema:
        try:
            await create_schema()
            logger.info("storefront.schema_ready")
        except Exception as e:
            # Chat works without a database; product routes will report errors.
            logger.warning("storefront.database_unavailable", error=str(e))

    hub = ChatHub(
        send_timeout=settings.chat_send_timeout,
        queue_maxsize=settings.chat_queue_maxsize,
    )
    hub.start()
    app.state.chat_hub = hub

    yield

    logger.info("storefront.shutdown")
    await hub.stop()
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Storefront",
        description="Products catalogue (REST + GraphQL) with a live chat room",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_methods,
        allow_headers=["Origin", "Content-Type", "Accept", "X-Request-ID"],
    )

    app.include_router(root_router)
    app.include_router(api_router)
    app.include_router(graphql_router, prefix="/api/graphql", tags=["graphql"])
    app.include_router(ws_router)

    # Must come last: a mount at / swallows every unmatched path.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


# Default app instance (used by uvicorn: storefront.main:app)
app = create_app()
