"""
Health check routes for monitoring and service discovery.
Provides endpoints to verify service health and storage availability.
"""

from fastapi import APIRouter

from blog_api.api.deps import Store
from blog_api.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    """
    Basic health check endpoint.
    Returns service status and version information.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }


@router.get("/health/storage")
def storage_health_check(store: Store) -> dict:
    """
    Storage health check endpoint.
    Verifies the data directory exists and is writable.
    """
    ok = store.ping()
    return {
        "status": "healthy" if ok else "unhealthy",
        "storage": "ok" if ok else "error",
        "path": str(store.base_path),
    }
