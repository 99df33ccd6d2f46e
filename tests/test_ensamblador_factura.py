from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from futuisp_facturacion.domain.entities import ConceptoFacturable
from futuisp_facturacion.domain.exceptions import ErrorEnsamblaje
from futuisp_facturacion.domain.services.agregador_conceptos import AgregadorConceptos
from futuisp_facturacion.domain.services.ensamblador_factura import EnsambladorFactura
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects import (
    CategoriaConcepto,
    TasasImpuesto,
    TipoServicio,
)
from tests.fakes import GENERADO_EN, servicio


def _ensamblar(servicios, periodo, contexto, conceptos=()):
    lineas = AgregadorConceptos.agregar(servicios, periodo, conceptos, [], contexto)
    return EnsambladorFactura.ensamblar(
        cliente_id=1,
        cliente_nombre="Cliente 1",
        periodo=periodo,
        lineas_base=lineas,
        contexto=contexto,
    )


def test_plan_solo_television(contexto):
    periodo = ResolvedorPeriodo.periodo_regular(date(2025, 4, 30))

    factura = _ensamblar(
        [servicio(tipo=TipoServicio.TELEVISION, precio="45000", estrato=1)], periodo, contexto
    )

    assert len(factura.lineas) == 1
    assert factura.lineas[0].base == Decimal("45000")
    assert factura.lineas[0].iva == Decimal("8550")
    assert factura.subtotal == Decimal("45000")
    assert factura.total_iva == Decimal("8550")
    assert factura.total == Decimal("53550")
    assert factura.fecha_vencimiento == date(2025, 4, 16)
    assert factura.fecha_emision == GENERADO_EN.date()
    assert factura.fecha_referencia == contexto.fecha_referencia


def test_factura_mixta_cuadra_totales(contexto):
    periodo = ResolvedorPeriodo.primer_periodo(date(2025, 3, 10))
    descuento = ConceptoFacturable(
        pendiente_id=3,
        codigo="DESC",
        nombre="Descuento promocional",
        valor_base=Decimal("5000"),
        aplica_iva=True,
        porcentaje_iva=Decimal("19"),
        categoria=CategoriaConcepto.DESCUENTO,
    )

    factura = _ensamblar([servicio(estrato=4)], periodo, contexto, [descuento])

    # 60000 + 42016 - 5000; IVA 11400 + 7983 (42016 * 19% = 7983.04)
    assert factura.subtotal == Decimal("97016")
    assert factura.total_iva == Decimal("19383")
    assert factura.total == Decimal("116399")
    assert factura.subtotal == sum(l.base for l in factura.lineas)
    assert factura.total_iva == sum(l.iva for l in factura.lineas)
    assert factura.conceptos_pendientes_ids == [3]


def test_internet_estrato_bajo_sin_iva(contexto):
    periodo = ResolvedorPeriodo.periodo_regular(date(2025, 4, 30))

    factura = _ensamblar([servicio(estrato=2)], periodo, contexto)

    assert factura.total_iva == 0
    assert factura.lineas[0].porcentaje_iva == 0
    assert factura.total == Decimal("60000")


def test_ensamblar_es_puro(contexto):
    periodo = ResolvedorPeriodo.primer_periodo(date(2025, 3, 10))

    primera = _ensamblar([servicio(estrato=5)], periodo, contexto)
    segunda = _ensamblar([servicio(estrato=5)], periodo, contexto)

    assert primera == segunda


def test_factura_sin_numero_ni_id(contexto):
    periodo = ResolvedorPeriodo.periodo_regular(date(2025, 4, 30))

    factura = _ensamblar([servicio()], periodo, contexto)

    assert factura.numero is None
    assert factura.factura_id is None
    assert factura.numerada("FAC000001").persistida(7).numero == "FAC000001"


def test_tasa_invalida_se_reporta_como_error_de_ensamblaje(contexto):
    periodo = ResolvedorPeriodo.periodo_regular(date(2025, 4, 30))
    contexto = replace(
        contexto,
        tasas=TasasImpuesto(porcentaje_iva=Decimal("120"), porcentaje_interes=Decimal("2")),
    )

    with pytest.raises(ErrorEnsamblaje) as exc:
        _ensamblar([servicio(tipo=TipoServicio.TELEVISION)], periodo, contexto)

    assert exc.value.cliente_id == 1
    assert "120" in exc.value.mensaje
