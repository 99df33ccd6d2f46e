"""Value Object para períodos de facturación."""
from dataclasses import dataclass
from datetime import date
from enum import Enum


class TipoPeriodo(str, Enum):
    """Clasificación de períodos de facturación."""

    PRIMERA = "PRIMERA"  # 30 días desde la activación
    NIVELACION = "NIVELACION"  # Hasta fin de mes para alinear al ciclo
    REGULAR = "REGULAR"  # Mes calendario completo

    @property
    def descripcion(self) -> str:
        """Descripción del período."""
        descripciones = {
            TipoPeriodo.PRIMERA: "Primera factura (30 días desde activación)",
            TipoPeriodo.NIVELACION: "Factura de nivelación (hasta fin de mes)",
            TipoPeriodo.REGULAR: "Factura mensual regular",
        }
        return descripciones[self]


@dataclass(frozen=True)
class PeriodoFacturacion:
    """Período cobrado en una factura."""

    inicio: date
    fin: date
    dias_totales: int
    dias_facturados: int
    es_prorrateado: bool
    tipo: TipoPeriodo

    def __post_init__(self):
        if self.fin < self.inicio:
            raise ValueError(f"Período inválido: {self.inicio} > {self.fin}")

    @property
    def etiqueta(self) -> str:
        """Texto usado en descripciones y en la columna periodo_facturacion."""
        return f"{self.inicio.isoformat()} al {self.fin.isoformat()}"


@dataclass(frozen=True)
class PeriodoFacturado:
    """Último período facturado a un cliente y la fecha de referencia de esa corrida."""

    periodo: PeriodoFacturacion
    fecha_referencia: date

    def cubre(self, fecha_referencia: date) -> bool:
        """Una corrida con esta fecha ya quedó resuelta por la factura anterior."""
        return fecha_referencia <= self.periodo.fin or fecha_referencia <= self.fecha_referencia
