"""Entidad de concepto facturable pendiente."""
from dataclasses import dataclass
from decimal import Decimal

from futuisp_facturacion.domain.value_objects.tipos import CategoriaConcepto


@dataclass(frozen=True)
class ConceptoFacturable:
    """Cargo no ligado al plan: reconexión, descuento, publicidad, etc."""

    pendiente_id: int
    codigo: str
    nombre: str
    valor_base: Decimal
    aplica_iva: bool
    porcentaje_iva: Decimal
    categoria: CategoriaConcepto = CategoriaConcepto.VARIOS

    @property
    def valor_con_signo(self) -> Decimal:
        """Los descuentos restan sin importar el signo configurado."""
        if self.categoria == CategoriaConcepto.DESCUENTO:
            return -abs(self.valor_base)
        return self.valor_base
