"""Caso de uso: Previsualizar la factura de un cliente."""
from datetime import date

from futuisp_facturacion.application.services.orquestador_facturacion import (
    OrquestadorFacturacion,
)
from futuisp_facturacion.application.use_cases.resumen_corrida import (
    factura_a_dict,
    incidencia_a_dict,
)
from futuisp_facturacion.domain.entities.corrida_facturacion import Incidencia


class PrevisualizarFacturaCliente:
    """Caso de uso para el preview de un solo cliente."""

    def __init__(self, orquestador: OrquestadorFacturacion):
        self.orquestador = orquestador

    async def execute(self, cliente_id: int, fecha_referencia: date) -> dict | None:
        """
        Ejecuta el caso de uso.

        Returns:
            {"cliente_id", "factura", "incidencia"} con uno de los dos
            últimos en None, o None si el cliente no tiene servicios activos
        """
        resultado = await self.orquestador.previsualizar_cliente(cliente_id, fecha_referencia)
        if resultado is None:
            return None

        if isinstance(resultado, Incidencia):
            return {
                "cliente_id": cliente_id,
                "factura": None,
                "incidencia": incidencia_a_dict(resultado),
            }

        return {
            "cliente_id": cliente_id,
            "factura": factura_a_dict(resultado),
            "incidencia": None,
        }
