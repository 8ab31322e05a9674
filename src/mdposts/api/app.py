"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from mdposts.api import routes
from mdposts.config import Settings, load_config
from mdposts.core.collection import build_context
from mdposts.core.models import ContentContext
from mdposts.log import setup_logging


def create_app(settings: Settings = None, content: ContentContext = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The post collection is built once during startup (or taken from
    `content` when given) and shared read-only by every request. A build
    failure propagates and the application does not start.
    """
    settings = settings or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger = setup_logging(settings.log_level)
        app.state.content = content or build_context(settings)
        logger.info("Serving %d post(s)", len(app.state.content.posts))
        yield

    app = FastAPI(
        title="mdposts",
        description="GraphQL access to markdown blog posts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(routes.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "posts": len(app.state.content.posts)}

    return app
