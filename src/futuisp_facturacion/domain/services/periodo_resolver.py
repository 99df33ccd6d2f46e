"""Servicio de dominio para resolver el período de facturación."""
import calendar
from datetime import date, timedelta
from typing import Iterable

from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente
from futuisp_facturacion.domain.exceptions import ServicioEstadoInvalido
from futuisp_facturacion.domain.value_objects.periodo_facturacion import (
    PeriodoFacturacion,
    PeriodoFacturado,
    TipoPeriodo,
)


class ResolvedorPeriodo:
    """
    Determina qué período cobrar a un cliente.

    Reglas de negocio:
    - PRIMERA: 30 días exactos desde la activación
    - NIVELACION: desde el día siguiente a la primera factura hasta fin de mes
    - REGULAR: mes calendario de la fecha de referencia
    - Si la última factura ya cubre la fecha de referencia (el período la
      contiene o se generó con una fecha igual o posterior) se devuelve ese
      mismo período; el orquestador lo encuentra facturado y lo omite
    """

    DIAS_CICLO = 30

    @staticmethod
    def resolver(
        servicios: Iterable[ServicioCliente],
        ultimo: PeriodoFacturado | None,
        fecha_referencia: date,
    ) -> PeriodoFacturacion:
        """
        Resuelve el período para los servicios activos de un cliente.

        Args:
            servicios: Servicios activos del cliente (al menos uno)
            ultimo: Último período facturado al cliente, si existe
            fecha_referencia: Fecha de referencia de la corrida

        Returns:
            PeriodoFacturacion a cobrar

        Raises:
            ServicioEstadoInvalido: activación ausente o futura, o estrato inválido
        """
        ancla = ResolvedorPeriodo.servicio_ancla(servicios, fecha_referencia)

        if ultimo is None:
            return ResolvedorPeriodo.primer_periodo(ancla.fecha_activacion)

        if ultimo.cubre(fecha_referencia):
            return ultimo.periodo

        if ultimo.periodo.tipo == TipoPeriodo.PRIMERA:
            return ResolvedorPeriodo.periodo_nivelacion(ultimo.periodo.fin)

        return ResolvedorPeriodo.periodo_regular(fecha_referencia)

    @staticmethod
    def servicio_ancla(
        servicios: Iterable[ServicioCliente],
        fecha_referencia: date,
    ) -> ServicioCliente:
        """Valida los servicios y devuelve el de activación más antigua."""
        servicios = list(servicios)
        if not servicios:
            raise ServicioEstadoInvalido("El cliente no tiene servicios activos")

        for servicio in servicios:
            ResolvedorPeriodo.validar_servicio(servicio, fecha_referencia)

        return min(servicios, key=lambda s: (s.fecha_activacion, s.servicio_id))

    @staticmethod
    def validar_servicio(servicio: ServicioCliente, fecha_referencia: date) -> None:
        if servicio.fecha_activacion is None:
            raise ServicioEstadoInvalido(
                f"Servicio {servicio.servicio_id} sin fecha de activación",
                cliente_id=servicio.cliente_id,
            )
        if servicio.fecha_activacion > fecha_referencia:
            raise ServicioEstadoInvalido(
                f"Servicio {servicio.servicio_id} activado el "
                f"{servicio.fecha_activacion} (posterior a {fecha_referencia})",
                cliente_id=servicio.cliente_id,
            )
        if not 1 <= servicio.estrato <= 6:
            raise ServicioEstadoInvalido(
                f"Estrato {servicio.estrato} fuera de rango (1-6)",
                cliente_id=servicio.cliente_id,
            )

    @staticmethod
    def primer_periodo(fecha_activacion: date) -> PeriodoFacturacion:
        dias = ResolvedorPeriodo.DIAS_CICLO
        return PeriodoFacturacion(
            inicio=fecha_activacion,
            fin=fecha_activacion + timedelta(days=dias - 1),
            dias_totales=dias,
            dias_facturados=dias,
            es_prorrateado=True,
            tipo=TipoPeriodo.PRIMERA,
        )

    @staticmethod
    def periodo_nivelacion(fin_anterior: date) -> PeriodoFacturacion:
        inicio = fin_anterior + timedelta(days=1)
        fin = _ultimo_dia_mes(inicio)
        return PeriodoFacturacion(
            inicio=inicio,
            fin=fin,
            dias_totales=ResolvedorPeriodo.DIAS_CICLO,
            dias_facturados=(fin - inicio).days + 1,
            es_prorrateado=True,
            tipo=TipoPeriodo.NIVELACION,
        )

    @staticmethod
    def periodo_regular(fecha_referencia: date) -> PeriodoFacturacion:
        inicio = fecha_referencia.replace(day=1)
        fin = _ultimo_dia_mes(inicio)
        return PeriodoFacturacion(
            inicio=inicio,
            fin=fin,
            dias_totales=fin.day,
            dias_facturados=fin.day,
            es_prorrateado=False,
            tipo=TipoPeriodo.REGULAR,
        )


def _ultimo_dia_mes(fecha: date) -> date:
    _, dias_mes = calendar.monthrange(fecha.year, fecha.month)
    return fecha.replace(day=dias_mes)
