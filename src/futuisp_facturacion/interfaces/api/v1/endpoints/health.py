"""Endpoint de health check."""
from fastapi import APIRouter

from futuisp_facturacion.infrastructure.cache.redis_cache import redis_cache
from futuisp_facturacion.infrastructure.config.settings import get_settings
from futuisp_facturacion.infrastructure.database.connection import db_manager
from futuisp_facturacion.interfaces.api.v1.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check del servicio."""
    settings = get_settings()

    db_status = "connected" if await db_manager.ping() else "disconnected"
    redis_status = "connected" if await redis_cache.ping() else "disconnected"

    status = "healthy" if db_status == "connected" and redis_status == "connected" else "degraded"

    return HealthResponse(
        status=status,
        service=settings.app_name,
        version=settings.app_version,
        database=db_status,
        redis=redis_status,
    )
