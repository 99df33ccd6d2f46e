"""Caso de uso: Ejecutar la facturación masiva."""
from datetime import date

from futuisp_facturacion.application.services.orquestador_facturacion import (
    OrquestadorFacturacion,
)
from futuisp_facturacion.application.use_cases.resumen_corrida import resumir_corrida


class EjecutarFacturacion:
    """
    Genera, numera y guarda las facturas del período.

    Reejecutar con la misma fecha es seguro: los clientes ya facturados
    aparecen como omisiones YA_FACTURADO.
    """

    def __init__(self, orquestador: OrquestadorFacturacion):
        self.orquestador = orquestador

    async def execute(self, fecha_referencia: date) -> dict:
        """Ejecuta el caso de uso."""
        corrida = await self.orquestador.ejecutar(fecha_referencia)
        return resumir_corrida(corrida)
