import logging
from datetime import date
from decimal import Decimal

import pytest

from futuisp_facturacion.domain.entities import ConceptoFacturable
from futuisp_facturacion.domain.exceptions import TasaImpuestoInvalida
from futuisp_facturacion.domain.services.agregador_conceptos import AgregadorConceptos
from futuisp_facturacion.domain.services.ensamblador_factura import EnsambladorFactura
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects import CategoriaConcepto
from futuisp_facturacion.infrastructure.config.logging import setup_logging
from futuisp_facturacion.infrastructure.config.settings import Settings
from futuisp_facturacion.infrastructure.database.repositories.configuracion_impuestos_provider_impl import (
    _decimal,
)
from futuisp_facturacion.infrastructure.database.repositories.factura_repository_impl import (
    FacturaRepositoryImpl,
)
from futuisp_facturacion.infrastructure.database.repositories.secuencia_provider_impl import (
    formatear_numero,
)
from tests.fakes import servicio


def test_formatear_numero():
    assert formatear_numero("FAC", 42) == "FAC000042"
    assert formatear_numero("FE", 1234567) == "FE1234567"


class TestTasasConfiguradas:
    def test_valor_de_bd(self):
        assert _decimal(" 19.5 ", Decimal("19"), "PORCENTAJE_IVA") == Decimal("19.5")

    @pytest.mark.parametrize("valor", [None, "", "   "])
    def test_valor_ausente_usa_defecto(self, valor):
        assert _decimal(valor, Decimal("19"), "PORCENTAJE_IVA") == Decimal("19")

    def test_valor_no_numerico(self):
        with pytest.raises(TasaImpuestoInvalida):
            _decimal("diecinueve", Decimal("19"), "PORCENTAJE_IVA")


def test_modelo_de_factura(contexto):
    periodo = ResolvedorPeriodo.primer_periodo(date(2025, 3, 10))
    concepto = ConceptoFacturable(
        pendiente_id=8,
        codigo="PUB",
        nombre="Publicidad",
        valor_base=Decimal("10000"),
        aplica_iva=True,
        porcentaje_iva=Decimal("19"),
        categoria=CategoriaConcepto.PUBLICIDAD,
    )
    lineas = AgregadorConceptos.agregar([servicio()], periodo, [concepto], [], contexto)
    factura = EnsambladorFactura.ensamblar(1, "Cliente 1", periodo, lineas, contexto).numerada(
        "FAC000010"
    )

    modelo = FacturaRepositoryImpl._a_modelo(factura)

    assert modelo.numero_factura == "FAC000010"
    assert (modelo.fecha_desde, modelo.fecha_hasta) == (date(2025, 3, 10), date(2025, 4, 8))
    assert modelo.fecha_referencia == date(2025, 4, 30)
    assert modelo.tipo_periodo == "PRIMERA"
    assert modelo.periodo_facturacion == "2025-03-10 al 2025-04-08"
    assert modelo.total == factura.total
    assert [d.orden for d in modelo.detalles] == [1, 2, 3]
    assert [d.aplica_iva for d in modelo.detalles] == [False, True, False]
    assert modelo.detalles[2].concepto_pendiente_id == 8


def test_database_url_escapa_password():
    settings = Settings(db_password="p@ss:w/rd")

    assert "p%40ss%3Aw%2Frd@" in settings.database_url
    assert settings.database_url.startswith("mysql+aiomysql://")


def test_setup_logging_no_duplica_handlers():
    setup_logging("INFO")
    antes = len(logging.getLogger().handlers)

    app_logger = setup_logging("DEBUG")

    handlers = logging.getLogger().handlers
    assert len(handlers) == antes
    assert [h.get_name() for h in handlers].count("futuisp_facturacion") == 1
    assert app_logger.level == logging.DEBUG
