"""Puerto (interfaz) para repositorio de facturas."""
from abc import ABC, abstractmethod
from datetime import date

from futuisp_facturacion.domain.entities.factura import Factura
from futuisp_facturacion.domain.entities.factura_vencida import FacturaVencida
from futuisp_facturacion.domain.value_objects.periodo_facturacion import (
    PeriodoFacturacion,
    PeriodoFacturado,
)


class FacturaRepository(ABC):
    """Interfaz para repositorio de facturas."""

    @abstractmethod
    async def existe(self, cliente_id: int, periodo: PeriodoFacturacion) -> bool:
        """Indica si ya hay factura para el cliente y período."""
        pass

    @abstractmethod
    async def guardar(self, factura: Factura, prefijo: str) -> Factura:
        """
        Numera y persiste la factura; marca sus conceptos pendientes como facturados.

        El consecutivo se reserva en la misma transacción que la factura,
        de modo que un guardado fallido no consume número.

        Returns:
            Copia de la factura con número e id asignados

        Raises:
            ConflictoPersistencia: ya existe factura para (cliente, período)
            ErrorPersistencia: cualquier otra falla de almacenamiento
        """
        pass

    @abstractmethod
    async def obtener_ultimo_periodo(self, cliente_id: int) -> PeriodoFacturado | None:
        """Período y fecha de referencia de la última factura no anulada."""
        pass

    @abstractmethod
    async def listar_vencidas(
        self,
        cliente_id: int,
        fecha_referencia: date,
    ) -> list[FacturaVencida]:
        """Facturas con saldo pendiente vencidas a la fecha de referencia."""
        pass
