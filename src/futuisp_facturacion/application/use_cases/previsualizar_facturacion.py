"""Caso de uso: Previsualizar la facturación masiva."""
from datetime import date

from futuisp_facturacion.application.services.orquestador_facturacion import (
    OrquestadorFacturacion,
)
from futuisp_facturacion.application.use_cases.resumen_corrida import resumir_corrida


class PrevisualizarFacturacion:
    """Calcula todas las facturas del período sin guardarlas."""

    def __init__(self, orquestador: OrquestadorFacturacion):
        self.orquestador = orquestador

    async def execute(self, fecha_referencia: date) -> dict:
        """Ejecuta el caso de uso."""
        corrida = await self.orquestador.preview(fecha_referencia)
        return resumir_corrida(corrida)
