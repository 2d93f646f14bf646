"""
Main Application Entry Point

FastAPI application factory and router registration.
"""

import logging

from fastapi import FastAPI

from rankcrawler.api.routes import crawl, health, scoring
from rankcrawler.api.routes.health import root_router as health_root_router
from rankcrawler.core.config import settings
from rankcrawler.core.events import lifespan


def create_app() -> FastAPI:
    """
    FastAPI application factory

    Creates and configures the FastAPI application with all routers.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Depth-bounded, priority-ordered crawler with link-graph ranking",
        lifespan=lifespan,
    )

    # Root-level health endpoints (Kubernetes probes)
    app.include_router(health_root_router, tags=["health"])

    # Register routers with /api/v1 prefix
    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(crawl.router, prefix="/api/v1", tags=["crawl"])
    app.include_router(scoring.router, prefix="/api/v1", tags=["scoring"])

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "rankcrawler.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
