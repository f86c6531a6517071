"""FastAPI application for the universe graph.

Serves projections of the knowledge universe to a browser-side force
renderer and receives its interaction events and simulated positions.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from universe.api.graph import router as graph_router
from universe.api.routes import router
from universe.config import settings
from universe.exceptions import UniverseError
from universe.loading import DocumentFetcher, DocumentResolver
from universe.navigation.session import NavigationSession

logger = logging.getLogger(__name__)


def create_session(fetcher: DocumentFetcher) -> NavigationSession:
    """Create a navigation session backed by the configured document source."""
    resolver = DocumentResolver(fetcher)
    return NavigationSession(resolver)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    fetcher: DocumentFetcher | None = None

    # Startup
    logger.info("Starting Universe API...")

    # Tests may install their own session before startup
    if getattr(app.state, "session", None) is None:
        fetcher = DocumentFetcher()
        app.state.session = create_session(fetcher)

    session: NavigationSession = app.state.session
    if not session.loaded:
        try:
            await session.load()
        except UniverseError as e:
            # Keep serving; /health reports the degraded state
            logger.error(f"Initial universe load failed: {e}")

    yield

    # Shutdown
    logger.info("Shutting down Universe API...")
    if fetcher is not None:
        await fetcher.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Universe",
        description="Explorable node-link graph of a personal knowledge universe",
        version="0.1.0",
        lifespan=lifespan,
    )

    # The renderer is served from a separate origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    app.include_router(router)
    app.include_router(graph_router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "universe.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
