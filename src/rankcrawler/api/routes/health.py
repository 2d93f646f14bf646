"""
Health Check Router

Provides Kubernetes-compatible health check endpoints:
- /health: Simple health for load balancers
- /health/live: Liveness probe (process alive)
- /health/ready: Readiness probe (graph store reachable)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from rankcrawler.api.deps import get_crawl_manager
from rankcrawler.workers.manager import CrawlManager

logger = logging.getLogger(__name__)

# Router for /api/v1 prefix
router = APIRouter()

# Router for root-level health endpoints
root_router = APIRouter()


# --- Root-level endpoints (Kubernetes probes) ---


@root_router.get("/health")
async def health():
    """Simple health check for load balancers."""
    return {"status": "ok"}


@root_router.get("/health/live")
async def liveness():
    """Kubernetes liveness probe - is the process running?"""
    return {"status": "ok"}


@root_router.get("/health/ready")
async def readiness(manager: CrawlManager = Depends(get_crawl_manager)):
    """Kubernetes readiness probe - is the graph store reachable?"""
    checks = {
        "graph_store": "ok" if manager.check_database() else "unhealthy",
    }

    all_healthy = all(v == "ok" for v in checks.values())
    status = "ok" if all_healthy else "unhealthy"

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={"status": status, "checks": checks},
    )


# --- /api/v1 endpoints ---


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
