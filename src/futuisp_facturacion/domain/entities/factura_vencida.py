"""Entidad de factura anterior con saldo pendiente."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class FacturaVencida:
    """Factura previa no pagada, base del cálculo de intereses de mora."""

    factura_id: int
    numero: str
    total: Decimal
    pagado: Decimal
    fecha_vencimiento: date

    @property
    def saldo_pendiente(self) -> Decimal:
        """Capital adeudado."""
        return max(self.total - self.pagado, Decimal("0"))

    def dias_vencido(self, fecha: date) -> int:
        """Días transcurridos desde el vencimiento hasta la fecha dada."""
        return max((fecha - self.fecha_vencimiento).days, 0)
