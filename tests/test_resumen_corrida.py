from datetime import date

import pytest

from futuisp_facturacion.application.use_cases.resumen_corrida import (
    desglose_por_linea,
    desglose_por_periodo,
    resumir_corrida,
)
from futuisp_facturacion.domain.entities import CorridaFacturacion, Incidencia, ModoCorrida
from futuisp_facturacion.domain.services.agregador_conceptos import AgregadorConceptos
from futuisp_facturacion.domain.services.ensamblador_factura import EnsambladorFactura
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects import TipoIncidencia, TipoServicio
from tests.fakes import GENERADO_EN, servicio


def _factura(contexto, cliente_id, periodo, **kwargs):
    servicios = [servicio(cliente_id=cliente_id, **kwargs)]
    lineas = AgregadorConceptos.agregar(servicios, periodo, [], [], contexto)
    return EnsambladorFactura.ensamblar(cliente_id, f"Cliente {cliente_id}", periodo, lineas, contexto)


@pytest.fixture
def facturas(contexto):
    primera = ResolvedorPeriodo.primer_periodo(date(2025, 4, 10))
    regular = ResolvedorPeriodo.periodo_regular(date(2025, 4, 30))
    return [
        _factura(contexto, 1, primera, estrato=2),
        _factura(contexto, 2, regular, tipo=TipoServicio.TELEVISION, precio="45000"),
        _factura(contexto, 3, regular, estrato=5),
    ]


def test_desglose_por_linea(facturas):
    filas = desglose_por_linea(facturas)

    assert filas == [
        {"tipo": "internet", "lineas": 2, "base": 120000, "iva": 11400, "total": 131400},
        {"tipo": "television", "lineas": 1, "base": 45000, "iva": 8550, "total": 53550},
        {"tipo": "instalacion", "lineas": 1, "base": 42016, "iva": 7983, "total": 49999},
    ]


def test_desglose_por_periodo(facturas):
    filas = desglose_por_periodo(facturas)

    assert [f["tipo_periodo"] for f in filas] == ["PRIMERA", "REGULAR"]
    assert filas[0]["facturas"] == 1
    assert filas[0]["total"] == 60000 + 42016 + 7983
    assert filas[1]["facturas"] == 2
    assert filas[1]["subtotal"] == 105000


def test_desgloses_vacios():
    assert desglose_por_linea([]) == []
    assert desglose_por_periodo([]) == []


def test_resumir_corrida(facturas):
    corrida = CorridaFacturacion(fecha_referencia=date(2025, 4, 30), modo=ModoCorrida.PREVIEW)
    corrida.iniciar(GENERADO_EN)
    for factura in facturas:
        corrida.registrar(factura)
    corrida.registrar(Incidencia(4, TipoIncidencia.SIN_CONCEPTOS, "nada que cobrar"))
    corrida.finalizar(GENERADO_EN)

    resumen = resumir_corrida(corrida)

    assert resumen["modo"] == "PREVIEW"
    assert resumen["estado"] == "FINALIZADA"
    assert resumen["clientes_intentados"] == 4
    assert resumen["exitosas"] == 3
    assert resumen["omitidas"] == 1
    assert resumen["totales"] == {
        "subtotal": 207016,
        "iva": 27933,
        "total": 234949,
    }
    assert resumen["omisiones"] == [
        {"cliente_id": 4, "tipo": "SIN_CONCEPTOS", "mensaje": "nada que cobrar"}
    ]
    factura = resumen["facturas_generadas"][0]
    assert factura["periodo"]["tipo"] == "PRIMERA"
    assert factura["lineas"][1]["tipo"] == "instalacion"
    assert factura["lineas"][1]["porcentaje_iva"] == 19.0


def test_resumir_corrida_vacia():
    corrida = CorridaFacturacion(fecha_referencia=date(2025, 4, 30), modo=ModoCorrida.EJECUCION)
    corrida.iniciar(GENERADO_EN)
    corrida.finalizar(GENERADO_EN)

    resumen = resumir_corrida(corrida)

    assert resumen["totales"] == {"subtotal": 0, "iva": 0, "total": 0}
    assert resumen["por_tipo_linea"] == []
    assert resumen["facturas_generadas"] == []
