"""Serialización y resumen tabular de corridas de facturación."""
from decimal import Decimal

import polars as pl

from futuisp_facturacion.domain.entities.corrida_facturacion import (
    CorridaFacturacion,
    Incidencia,
)
from futuisp_facturacion.domain.entities.factura import Factura
from futuisp_facturacion.domain.value_objects.periodo_facturacion import TipoPeriodo


def _pesos(valor: Decimal) -> int:
    # Los montos ya vienen redondeados a la unidad
    return int(valor)


def factura_a_dict(factura: Factura) -> dict:
    periodo = factura.periodo
    return {
        "cliente_id": factura.cliente_id,
        "cliente_nombre": factura.cliente_nombre,
        "numero": factura.numero,
        "factura_id": factura.factura_id,
        "periodo": {
            "inicio": periodo.inicio,
            "fin": periodo.fin,
            "tipo": periodo.tipo.value,
            "descripcion": periodo.tipo.descripcion,
            "dias_totales": periodo.dias_totales,
            "dias_facturados": periodo.dias_facturados,
            "es_prorrateado": periodo.es_prorrateado,
        },
        "fecha_emision": factura.fecha_emision,
        "fecha_vencimiento": factura.fecha_vencimiento,
        "subtotal": _pesos(factura.subtotal),
        "iva": _pesos(factura.total_iva),
        "total": _pesos(factura.total),
        "lineas": [
            {
                "origen": linea.origen.value,
                "tipo": linea.tipo.value,
                "descripcion": linea.descripcion,
                "base": _pesos(linea.base),
                "porcentaje_iva": float(linea.porcentaje_iva),
                "iva": _pesos(linea.iva),
                "total": _pesos(linea.total),
            }
            for linea in factura.lineas
        ],
    }


def incidencia_a_dict(incidencia: Incidencia) -> dict:
    return {
        "cliente_id": incidencia.cliente_id,
        "tipo": incidencia.tipo.value,
        "mensaje": incidencia.mensaje,
    }


def desglose_por_linea(facturas: tuple[Factura, ...] | list[Factura]) -> list[dict]:
    """Cantidad de líneas, base e IVA agrupados por tipo de línea."""
    filas = [
        (linea.tipo.value, linea.tipo.orden, _pesos(linea.base), _pesos(linea.iva))
        for factura in facturas
        for linea in factura.lineas
    ]
    df = pl.DataFrame(
        filas,
        schema={"tipo": pl.Utf8, "orden": pl.Int64, "base": pl.Int64, "iva": pl.Int64},
        orient="row",
    )

    resumen = (
        df.lazy()
        .group_by(["tipo", "orden"])
        .agg(
            pl.len().alias("lineas"),
            pl.col("base").sum(),
            pl.col("iva").sum(),
        )
        .with_columns((pl.col("base") + pl.col("iva")).alias("total"))
        .sort("orden")
        .drop("orden")
        .collect()
    )
    return resumen.to_dicts()


def desglose_por_periodo(facturas: tuple[Factura, ...] | list[Factura]) -> list[dict]:
    """Facturas y montos por tipo de período (PRIMERA, NIVELACION, REGULAR)."""
    orden_periodo = {tipo.value: i for i, tipo in enumerate(TipoPeriodo)}
    df = pl.DataFrame(
        [
            (f.periodo.tipo.value, orden_periodo[f.periodo.tipo.value], _pesos(f.subtotal),
             _pesos(f.total_iva), _pesos(f.total))
            for f in facturas
        ],
        schema={
            "tipo_periodo": pl.Utf8,
            "orden": pl.Int64,
            "subtotal": pl.Int64,
            "iva": pl.Int64,
            "total": pl.Int64,
        },
        orient="row",
    )

    resumen = (
        df.lazy()
        .group_by(["tipo_periodo", "orden"])
        .agg(
            pl.len().alias("facturas"),
            pl.col("subtotal").sum(),
            pl.col("iva").sum(),
            pl.col("total").sum(),
        )
        .sort("orden")
        .drop("orden")
        .collect()
    )
    return resumen.to_dicts()


def resumir_corrida(corrida: CorridaFacturacion) -> dict:
    """
    Convierte una corrida finalizada en el diccionario de respuesta.

    Incluye contadores, totales, desgloses y el detalle por cliente.
    """
    facturas = corrida.facturas_generadas
    return {
        "fecha_referencia": corrida.fecha_referencia,
        "modo": corrida.modo.value,
        "estado": corrida.estado.value,
        "iniciada_en": corrida.iniciada_en,
        "finalizada_en": corrida.finalizada_en,
        "clientes_intentados": corrida.clientes_intentados,
        "exitosas": corrida.exitosas,
        "fallidas": corrida.fallidas,
        "omitidas": corrida.omitidas,
        "totales": {
            "subtotal": _pesos(corrida.subtotal),
            "iva": _pesos(corrida.total_iva),
            "total": _pesos(corrida.total),
        },
        "por_tipo_linea": desglose_por_linea(facturas),
        "por_tipo_periodo": desglose_por_periodo(facturas),
        "facturas_generadas": [factura_a_dict(f) for f in facturas],
        "errores": [incidencia_a_dict(i) for i in corrida.errores],
        "omisiones": [incidencia_a_dict(i) for i in corrida.omisiones],
    }

