"""Entidades de factura y sus líneas."""
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal

from futuisp_facturacion.domain.value_objects.periodo_facturacion import PeriodoFacturacion
from futuisp_facturacion.domain.value_objects.tipos import (
    CategoriaConcepto,
    OrigenLinea,
    TipoLinea,
)


@dataclass(frozen=True)
class LineaBase:
    """Línea antes de impuestos, tal como la produce el agregador."""

    origen: OrigenLinea
    tipo: TipoLinea
    descripcion: str
    base: Decimal
    estrato: int | None = None
    aplica_iva: bool = False
    porcentaje_iva: Decimal | None = None
    categoria: CategoriaConcepto | None = None
    concepto_pendiente_id: int | None = None


@dataclass(frozen=True)
class LineaFactura:
    """Cargo dentro de una factura ensamblada."""

    origen: OrigenLinea
    tipo: TipoLinea
    descripcion: str
    base: Decimal
    iva: Decimal
    porcentaje_iva: Decimal
    concepto_pendiente_id: int | None = None

    @property
    def total(self) -> Decimal:
        return self.base + self.iva


@dataclass(frozen=True)
class Factura:
    """
    Factura inmutable de un cliente para un período.

    La identidad de negocio es (cliente_id, periodo.inicio, periodo.fin).
    `numero` y `factura_id` solo existen después de persistir.
    """

    cliente_id: int
    cliente_nombre: str
    periodo: PeriodoFacturacion
    lineas: tuple[LineaFactura, ...]
    subtotal: Decimal
    total_iva: Decimal
    total: Decimal
    generado_en: datetime
    fecha_vencimiento: date
    fecha_referencia: date
    numero: str | None = None
    factura_id: int | None = None

    def __post_init__(self):
        if self.subtotal != sum((linea.base for linea in self.lineas), Decimal("0")):
            raise ValueError("subtotal no coincide con la suma de bases")
        if self.total_iva != sum((linea.iva for linea in self.lineas), Decimal("0")):
            raise ValueError("total_iva no coincide con la suma de IVA")
        if self.total != self.subtotal + self.total_iva:
            raise ValueError("total != subtotal + total_iva")

    @property
    def fecha_emision(self) -> date:
        return self.generado_en.date()

    @property
    def conceptos_pendientes_ids(self) -> list[int]:
        """Conceptos pendientes consumidos por esta factura."""
        return [
            linea.concepto_pendiente_id
            for linea in self.lineas
            if linea.concepto_pendiente_id is not None
        ]

    def numerada(self, numero: str) -> "Factura":
        """Copia con número consecutivo asignado."""
        return replace(self, numero=numero)

    def persistida(self, factura_id: int) -> "Factura":
        """Copia con el id asignado por el repositorio."""
        return replace(self, factura_id=factura_id)
