"""Health check routes"""

from fastapi import APIRouter, Depends

from adapters import mongo_adapter
from api.dependencies import get_app_settings
from app.config import Settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_app_settings)):
    """Liveness plus a MongoDB ping"""
    database = "ok" if mongo_adapter.ping() else "unavailable"
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
        "database": database,
    }
