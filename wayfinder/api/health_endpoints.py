"""
Service index, liveness and runtime status endpoints.
"""
import platform
from datetime import datetime, timezone

from fastapi import APIRouter

from wayfinder.config.settings import settings
from wayfinder.core.error_handlers import error_handler
from wayfinder.core.metrics import snapshot_metrics

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("")
async def api_index():
    """JSON index of the public and protected endpoints."""
    return {
        "service": settings.app_name,
        "version": "v1",
        "endpoints": {
            "public": {
                "index": "/v1",
                "health": "/v1/health",
                "status": "/v1/status",
                "docs": "/docs",
            },
            "trip": {
                "nearbyPois": "GET /v1/trip/{trip_id}/nearby-pois?latitude=&longitude=&radius_meters=&category=",
            },
            "partner": {
                "createPoi": "POST /v1/partner/{partner_id}/poi",
                "listPois": "GET /v1/partner/{partner_id}/pois",
            },
        },
    }


@router.get("/health")
async def health():
    return {"ok": True, "service": settings.app_name, "version": settings.app_version}


@router.get("/status")
async def status():
    """Runtime information plus nearby-query metrics."""
    return {
        "ok": True,
        "service": settings.app_name,
        "version": settings.app_version,
        "python": platform.python_version(),
        "environment": settings.environment.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "spatial_queries_enabled": settings.nearby.spatial_queries_enabled,
        "metrics": snapshot_metrics(),
        "error_statistics": error_handler.get_error_statistics(),
    }
