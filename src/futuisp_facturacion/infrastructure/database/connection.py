"""Gestión de conexiones a la base de datos."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from futuisp_facturacion.infrastructure.config.logging import logger
from futuisp_facturacion.infrastructure.config.settings import get_settings


class DatabaseManager:
    """
    Gestor de conexiones a base de datos.

    Cada repositorio abre una sesión corta por operación; así las tareas
    concurrentes de una corrida nunca comparten sesión.
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    def initialize(self, engine: AsyncEngine | None = None) -> None:
        """
        Inicializa el motor de base de datos.

        Args:
            engine: Motor ya construido; si se omite se crea desde settings
        """
        if engine is None:
            engine = self._crear_engine()

        self._engine = engine
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _crear_engine() -> AsyncEngine:
        settings = get_settings()

        # El pool debe alcanzar para los workers de facturación
        pool_size = max(settings.db_pool_size, settings.facturacion_max_workers)

        return create_async_engine(
            settings.database_url,
            pool_size=pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=settings.db_pool_recycle,
            echo=settings.debug,
            pool_pre_ping=True,
        )

    @property
    def inicializada(self) -> bool:
        return self._session_factory is not None

    async def close(self) -> None:
        """Cierra las conexiones."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

    async def ping(self) -> bool:
        """Verifica que la base de datos responda."""
        if not self.inicializada:
            return False
        try:
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Base de datos no responde: {e}")
            return False

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Sesión transaccional: commit al salir, rollback ante error."""
        if not self._session_factory:
            raise RuntimeError("Database no inicializada")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


# Instancia global
db_manager = DatabaseManager()
