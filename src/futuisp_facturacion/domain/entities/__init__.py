"""Entidades del dominio."""
from futuisp_facturacion.domain.entities.concepto_facturable import ConceptoFacturable
from futuisp_facturacion.domain.entities.corrida_facturacion import (
    CorridaFacturacion,
    EstadoCorrida,
    Incidencia,
    ModoCorrida,
    ResultadoCliente,
)
from futuisp_facturacion.domain.entities.factura import Factura, LineaBase, LineaFactura
from futuisp_facturacion.domain.entities.factura_vencida import FacturaVencida
from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente

__all__ = [
    "ConceptoFacturable",
    "CorridaFacturacion",
    "EstadoCorrida",
    "Factura",
    "FacturaVencida",
    "Incidencia",
    "LineaBase",
    "LineaFactura",
    "ModoCorrida",
    "ResultadoCliente",
    "ServicioCliente",
]
