"""Lectura de porcentajes de impuestos desde configuracion_facturacion."""
from decimal import Decimal, InvalidOperation

from sqlalchemy import select

from futuisp_facturacion.application.ports.configuracion_impuestos_provider import (
    ConfiguracionImpuestosProvider,
)
from futuisp_facturacion.domain.exceptions import TasaImpuestoInvalida
from futuisp_facturacion.domain.value_objects.contexto_facturacion import TasasImpuesto
from futuisp_facturacion.infrastructure.database.connection import DatabaseManager
from futuisp_facturacion.infrastructure.database.models import ConfiguracionFacturacion

CLAVE_IVA = "PORCENTAJE_IVA"
CLAVE_INTERES = "PORCENTAJE_INTERES_MORA"


class ConfiguracionImpuestosProviderImpl(ConfiguracionImpuestosProvider):
    """Usa los valores por defecto de settings cuando la clave no existe."""

    def __init__(
        self,
        db: DatabaseManager,
        porcentaje_iva_defecto: Decimal,
        porcentaje_interes_defecto: Decimal,
    ):
        self.db = db
        self.porcentaje_iva_defecto = porcentaje_iva_defecto
        self.porcentaje_interes_defecto = porcentaje_interes_defecto

    async def tasas(self) -> TasasImpuesto:
        async with self.db.get_session() as session:
            result = await session.execute(
                select(ConfiguracionFacturacion.clave, ConfiguracionFacturacion.valor).where(
                    ConfiguracionFacturacion.clave.in_((CLAVE_IVA, CLAVE_INTERES))
                )
            )
            valores = {row.clave: row.valor for row in result.all()}

        return TasasImpuesto(
            porcentaje_iva=_decimal(valores.get(CLAVE_IVA), self.porcentaje_iva_defecto, CLAVE_IVA),
            porcentaje_interes=_decimal(
                valores.get(CLAVE_INTERES), self.porcentaje_interes_defecto, CLAVE_INTERES
            ),
        )


def _decimal(valor: str | None, defecto: Decimal, clave: str) -> Decimal:
    if valor is None or not valor.strip():
        return defecto
    try:
        return Decimal(valor.strip())
    except InvalidOperation as e:
        raise TasaImpuestoInvalida(f"{clave} no es numérico: '{valor}'") from e
