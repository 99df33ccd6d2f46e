"""Servicio de dominio para ensamblar facturas."""
from datetime import timedelta
from decimal import Decimal
from typing import Sequence

from futuisp_facturacion.domain.entities.factura import Factura, LineaBase, LineaFactura
from futuisp_facturacion.domain.exceptions import ErrorEnsamblaje, FacturacionError
from futuisp_facturacion.domain.services.calculadora_iva import CERO, CalculadoraIVA
from futuisp_facturacion.domain.value_objects.contexto_facturacion import ContextoFacturacion
from futuisp_facturacion.domain.value_objects.periodo_facturacion import PeriodoFacturacion


class EnsambladorFactura:
    """
    Convierte las líneas base en una factura con impuestos y totales.

    Función pura: no lee reloj ni base de datos. La fecha de emisión
    sale de `contexto.generado_en`.
    """

    @staticmethod
    def ensamblar(
        cliente_id: int,
        cliente_nombre: str,
        periodo: PeriodoFacturacion,
        lineas_base: Sequence[LineaBase],
        contexto: ContextoFacturacion,
    ) -> Factura:
        """
        Ensambla la factura sin número.

        Raises:
            ErrorEnsamblaje: si falla el cálculo de impuestos o los totales
        """
        try:
            lineas = tuple(
                EnsambladorFactura._linea(linea, contexto.tasas.porcentaje_iva)
                for linea in lineas_base
            )
            subtotal = sum((linea.base for linea in lineas), CERO)
            total_iva = sum((linea.iva for linea in lineas), CERO)

            return Factura(
                cliente_id=cliente_id,
                cliente_nombre=cliente_nombre,
                periodo=periodo,
                lineas=lineas,
                subtotal=subtotal,
                total_iva=total_iva,
                total=subtotal + total_iva,
                generado_en=contexto.generado_en,
                fecha_vencimiento=contexto.generado_en.date()
                + timedelta(days=contexto.parametros.dias_vencimiento),
                fecha_referencia=contexto.fecha_referencia,
            )
        except FacturacionError as e:
            raise ErrorEnsamblaje(e.mensaje, cliente_id=cliente_id) from e
        except ValueError as e:
            raise ErrorEnsamblaje(str(e), cliente_id=cliente_id) from e

    @staticmethod
    def _linea(linea: LineaBase, porcentaje_configurado: Decimal) -> LineaFactura:
        iva, porcentaje = CalculadoraIVA.calcular_linea(linea, porcentaje_configurado)
        return LineaFactura(
            origen=linea.origen,
            tipo=linea.tipo,
            descripcion=linea.descripcion,
            base=linea.base,
            iva=iva,
            porcentaje_iva=porcentaje,
            concepto_pendiente_id=linea.concepto_pendiente_id,
        )
