"""Value Objects del dominio."""
from futuisp_facturacion.domain.value_objects.contexto_facturacion import (
    ContextoFacturacion,
    ParametrosFacturacion,
    TasasImpuesto,
)
from futuisp_facturacion.domain.value_objects.periodo_facturacion import (
    PeriodoFacturacion,
    PeriodoFacturado,
    TipoPeriodo,
)
from futuisp_facturacion.domain.value_objects.tipos import (
    CategoriaConcepto,
    EstadoServicio,
    OrigenLinea,
    TipoIncidencia,
    TipoLinea,
    TipoServicio,
)

__all__ = [
    "CategoriaConcepto",
    "ContextoFacturacion",
    "EstadoServicio",
    "OrigenLinea",
    "ParametrosFacturacion",
    "PeriodoFacturacion",
    "PeriodoFacturado",
    "TasasImpuesto",
    "TipoIncidencia",
    "TipoLinea",
    "TipoPeriodo",
    "TipoServicio",
]
