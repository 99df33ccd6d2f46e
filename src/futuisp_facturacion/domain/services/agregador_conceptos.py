"""Servicio de dominio para agregar los conceptos de una factura."""
from datetime import date
from decimal import Decimal
from typing import Iterable

from futuisp_facturacion.domain.entities.concepto_facturable import ConceptoFacturable
from futuisp_facturacion.domain.entities.factura import LineaBase
from futuisp_facturacion.domain.entities.factura_vencida import FacturaVencida
from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente
from futuisp_facturacion.domain.exceptions import SinConceptosFacturables
from futuisp_facturacion.domain.services.calculadora_iva import CERO, CalculadoraIVA
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects.contexto_facturacion import ContextoFacturacion
from futuisp_facturacion.domain.value_objects.periodo_facturacion import (
    PeriodoFacturacion,
    TipoPeriodo,
)
from futuisp_facturacion.domain.value_objects.tipos import (
    CategoriaConcepto,
    OrigenLinea,
    TipoLinea,
)


class AgregadorConceptos:
    """
    Reúne las líneas cobrables de un cliente para un período.

    Orden de presentación: internet, televisión, combo, instalación,
    conceptos pendientes (en el orden configurado) e intereses al final.
    """

    @staticmethod
    def agregar(
        servicios: Iterable[ServicioCliente],
        periodo: PeriodoFacturacion,
        conceptos: Iterable[ConceptoFacturable],
        vencidas: Iterable[FacturaVencida],
        contexto: ContextoFacturacion,
    ) -> list[LineaBase]:
        """
        Construye las líneas antes de impuestos.

        Raises:
            SinConceptosFacturables: si no hay ninguna línea que cobrar
            TasaImpuestoInvalida: si el porcentaje de interés es inválido
        """
        lineas: list[LineaBase] = []

        lineas.extend(AgregadorConceptos.lineas_servicios(servicios, periodo))

        if periodo.tipo == TipoPeriodo.PRIMERA:
            instalacion = AgregadorConceptos.linea_instalacion(contexto)
            if instalacion is not None:
                lineas.append(instalacion)

        lineas.extend(AgregadorConceptos.linea_concepto(c) for c in conceptos)

        interes = AgregadorConceptos.calcular_interes_mora(
            vencidas,
            fecha_referencia=contexto.fecha_referencia,
            porcentaje_mensual=contexto.tasas.porcentaje_interes,
            dias_mora=contexto.parametros.dias_mora_interes,
        )
        if interes > 0:
            lineas.append(
                LineaBase(
                    origen=OrigenLinea.CONCEPTO,
                    tipo=TipoLinea.INTERES,
                    descripcion="Intereses por mora",
                    base=interes,
                    categoria=CategoriaConcepto.INTERES,
                )
            )

        if not lineas:
            raise SinConceptosFacturables(f"Nada que facturar en {periodo.etiqueta}")

        # sorted() es estable: conceptos conservan su orden configurado
        return sorted(lineas, key=lambda linea: linea.tipo.orden)

    @staticmethod
    def valor_servicio(precio_mensual: Decimal, periodo: PeriodoFacturacion) -> Decimal:
        """Precio del servicio prorrateado sobre un ciclo fijo de 30 días."""
        if not periodo.es_prorrateado:
            return CalculadoraIVA.redondear(precio_mensual)
        return CalculadoraIVA.redondear(
            precio_mensual * periodo.dias_facturados / Decimal(ResolvedorPeriodo.DIAS_CICLO)
        )

    @staticmethod
    def lineas_servicios(
        servicios: Iterable[ServicioCliente],
        periodo: PeriodoFacturacion,
    ) -> list[LineaBase]:
        activos = [s for s in servicios if s.esta_activo]
        activos.sort(key=lambda s: (TipoLinea.desde_servicio(s.tipo).orden, s.servicio_id))

        lineas = []
        for servicio in activos:
            base = AgregadorConceptos.valor_servicio(servicio.precio_mensual, periodo)
            if base == 0:
                continue
            lineas.append(
                LineaBase(
                    origen=OrigenLinea.SERVICIO,
                    tipo=TipoLinea.desde_servicio(servicio.tipo),
                    descripcion=f"{servicio.nombre_plan} - {periodo.etiqueta}",
                    base=base,
                    estrato=servicio.estrato,
                    aplica_iva=servicio.aplica_iva,
                )
            )
        return lineas

    @staticmethod
    def linea_instalacion(contexto: ContextoFacturacion) -> LineaBase | None:
        valor = contexto.parametros.valor_instalacion
        if valor <= 0:
            return None
        return LineaBase(
            origen=OrigenLinea.CONCEPTO,
            tipo=TipoLinea.INSTALACION,
            descripcion="Cargo por instalación",
            base=CalculadoraIVA.redondear(valor),
            aplica_iva=contexto.parametros.instalacion_aplica_iva,
            categoria=CategoriaConcepto.INSTALACION,
        )

    @staticmethod
    def linea_concepto(concepto: ConceptoFacturable) -> LineaBase:
        return LineaBase(
            origen=OrigenLinea.CONCEPTO,
            tipo=TipoLinea.CONCEPTO,
            descripcion=concepto.nombre,
            base=CalculadoraIVA.redondear(concepto.valor_con_signo),
            aplica_iva=concepto.aplica_iva,
            porcentaje_iva=concepto.porcentaje_iva,
            categoria=concepto.categoria,
            concepto_pendiente_id=concepto.pendiente_id,
        )

    @staticmethod
    def calcular_interes_mora(
        vencidas: Iterable[FacturaVencida],
        fecha_referencia: date,
        porcentaje_mensual: Decimal,
        dias_mora: int = 30,
    ) -> Decimal:
        """
        Interés de mora acumulado sobre facturas vencidas.

        Fórmula por factura con más de `dias_mora` días vencida:
            saldo × (porcentaje_mensual / 100) / 30 × días_vencido

        La suma se redondea una sola vez.
        """
        porcentaje = CalculadoraIVA.validar_porcentaje(porcentaje_mensual)
        if porcentaje == 0:
            return CERO

        tasa_diaria = porcentaje / Decimal(100) / Decimal(ResolvedorPeriodo.DIAS_CICLO)
        total = CERO
        for factura in vencidas:
            dias = factura.dias_vencido(fecha_referencia)
            if dias > dias_mora and factura.saldo_pendiente > 0:
                total += factura.saldo_pendiente * tasa_diaria * dias

        return CalculadoraIVA.redondear(total)
