"""Aplicación principal FastAPI."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from futuisp_facturacion.infrastructure.cache.redis_cache import redis_cache
from futuisp_facturacion.infrastructure.config.logging import logger, setup_logging
from futuisp_facturacion.infrastructure.config.settings import get_settings
from futuisp_facturacion.infrastructure.database.connection import db_manager
from futuisp_facturacion.interfaces.api.v1.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gestiona el ciclo de vida de la aplicación."""
    settings = get_settings()

    setup_logging(level="DEBUG" if settings.debug else "INFO")

    logger.info(f"Iniciando {settings.app_name} v{settings.app_version}")

    logger.info("Conectando a base de datos...")
    try:
        db_manager.initialize()
        logger.info("Base de datos conectada")
    except Exception as e:
        logger.error(f"Error conectando a base de datos: {e}")
        raise

    # Redis es opcional: sin él no hay caché de previews
    try:
        await redis_cache.initialize()
        logger.info("Redis conectado")
    except Exception as e:
        logger.warning(f"Redis no disponible: {e}")

    logger.info(
        f"Facturación lista: prefijo {settings.facturacion_prefijo}, "
        f"{settings.facturacion_max_workers} workers, "
        f"timeout {settings.facturacion_timeout_cliente}s por cliente"
    )

    yield

    logger.info("Cerrando conexiones...")
    await db_manager.close()
    await redis_cache.close()
    logger.info("Servicios detenidos")


def create_app() -> FastAPI:
    """Factory de la aplicación."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Motor de facturación recurrente para FUTUISP",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # En producción: especificar dominios
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
