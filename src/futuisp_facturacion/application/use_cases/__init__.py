"""Casos de uso de la aplicación."""
from futuisp_facturacion.application.use_cases.ejecutar_facturacion import EjecutarFacturacion
from futuisp_facturacion.application.use_cases.previsualizar_factura_cliente import (
    PrevisualizarFacturaCliente,
)
from futuisp_facturacion.application.use_cases.previsualizar_facturacion import (
    PrevisualizarFacturacion,
)

__all__ = ["EjecutarFacturacion", "PrevisualizarFacturacion", "PrevisualizarFacturaCliente"]
