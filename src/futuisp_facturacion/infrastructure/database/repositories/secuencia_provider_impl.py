"""Numeración consecutiva de facturas en MySQL."""
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from futuisp_facturacion.application.ports.secuencia_provider import SecuenciaProvider
from futuisp_facturacion.domain.exceptions import ErrorPersistencia
from futuisp_facturacion.infrastructure.database.connection import DatabaseManager
from futuisp_facturacion.infrastructure.database.models import ConsecutivoFactura


def formatear_numero(prefijo: str, consecutivo: int) -> str:
    """FAC + consecutivo con 6 dígitos (ej: FAC000042)."""
    return f"{prefijo}{consecutivo:06d}"


class SecuenciaProviderImpl(SecuenciaProvider):
    """
    Reserva números con SELECT ... FOR UPDATE sobre consecutivos_factura.

    Con `session` el incremento viaja en la transacción del llamador: si
    esa transacción hace rollback el número se libera y no quedan huecos.
    El bloqueo de la fila se mantiene hasta el commit del llamador.
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def siguiente(self, prefijo: str, session: AsyncSession | None = None) -> str:
        if session is not None:
            return await self._reservar(session, prefijo)

        try:
            async with self.db.get_session() as propia:
                return await self._reservar(propia, prefijo)
        except SQLAlchemyError as e:
            raise ErrorPersistencia(f"No se pudo reservar consecutivo {prefijo}: {e}") from e

    @staticmethod
    async def _reservar(session: AsyncSession, prefijo: str) -> str:
        result = await session.execute(
            select(ConsecutivoFactura)
            .where(ConsecutivoFactura.prefijo == prefijo)
            .with_for_update()
        )
        fila = result.scalar_one_or_none()

        if fila is None:
            fila = ConsecutivoFactura(prefijo=prefijo, ultimo_numero=0)
            session.add(fila)

        fila.ultimo_numero += 1
        await session.flush()
        return formatear_numero(prefijo, fila.ultimo_numero)
