"""Puertos de la capa de aplicación."""
from futuisp_facturacion.application.ports.concepto_repository import ConceptoRepository
from futuisp_facturacion.application.ports.configuracion_impuestos_provider import (
    ConfiguracionImpuestosProvider,
)
from futuisp_facturacion.application.ports.factura_repository import FacturaRepository
from futuisp_facturacion.application.ports.secuencia_provider import SecuenciaProvider
from futuisp_facturacion.application.ports.servicio_cliente_repository import (
    ServicioClienteRepository,
)

__all__ = [
    "ConceptoRepository",
    "ConfiguracionImpuestosProvider",
    "FacturaRepository",
    "SecuenciaProvider",
    "ServicioClienteRepository",
]
