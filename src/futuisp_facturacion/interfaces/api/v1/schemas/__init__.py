"""Schemas de la API v1."""
from futuisp_facturacion.interfaces.api.v1.schemas.facturacion import (
    FacturaSchema,
    IncidenciaSchema,
    PreviewClienteResponse,
    ResultadoCorridaResponse,
)
from futuisp_facturacion.interfaces.api.v1.schemas.requests import EjecutarFacturacionRequest
from futuisp_facturacion.interfaces.api.v1.schemas.responses import HealthResponse

__all__ = [
    "EjecutarFacturacionRequest",
    "FacturaSchema",
    "HealthResponse",
    "IncidenciaSchema",
    "PreviewClienteResponse",
    "ResultadoCorridaResponse",
]
