"""Entidad de servicio contratado por un cliente."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from futuisp_facturacion.domain.value_objects.tipos import EstadoServicio, TipoServicio


@dataclass(frozen=True)
class ServicioCliente:
    """Snapshot de solo lectura de un servicio activo del cliente."""

    servicio_id: int
    cliente_id: int
    cliente_nombre: str
    tipo: TipoServicio
    nombre_plan: str
    precio_mensual: Decimal
    aplica_iva: bool
    estrato: int
    fecha_activacion: date | None
    estado: EstadoServicio = EstadoServicio.ACTIVO

    @property
    def esta_activo(self) -> bool:
        """Verifica si el servicio debe facturarse."""
        return self.estado == EstadoServicio.ACTIVO
