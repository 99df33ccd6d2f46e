from datetime import date

import pytest

from futuisp_facturacion.domain.exceptions import ServicioEstadoInvalido
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects import PeriodoFacturado, TipoPeriodo
from futuisp_facturacion.domain.value_objects.tipos import TipoIncidencia
from tests.fakes import servicio


def _facturado(periodo, fecha_referencia):
    return PeriodoFacturado(periodo=periodo, fecha_referencia=fecha_referencia)


class TestPrimerPeriodo:
    def test_treinta_dias_desde_activacion(self):
        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 3, 10))], None, date(2025, 3, 31)
        )

        assert periodo.inicio == date(2025, 3, 10)
        assert periodo.fin == date(2025, 4, 8)
        assert periodo.tipo == TipoPeriodo.PRIMERA
        assert periodo.es_prorrateado is True
        assert periodo.dias_facturados == 30
        assert periodo.dias_totales == 30

    def test_activacion_ultimo_dia_del_mes(self):
        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 1, 31))], None, date(2025, 2, 28)
        )

        assert periodo.inicio == date(2025, 1, 31)
        assert periodo.fin == date(2025, 3, 1)
        assert periodo.dias_facturados == 30

    def test_ancla_es_el_servicio_mas_antiguo(self):
        servicios = [
            servicio(servicio_id=1, activacion=date(2025, 2, 1)),
            servicio(servicio_id=2, activacion=date(2025, 1, 15)),
        ]

        periodo = ResolvedorPeriodo.resolver(servicios, None, date(2025, 2, 28))

        assert periodo.inicio == date(2025, 1, 15)


class TestNivelacion:
    def test_desde_fin_de_primera_hasta_fin_de_mes(self):
        primera = ResolvedorPeriodo.primer_periodo(date(2025, 3, 10))

        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 3, 10))],
            _facturado(primera, date(2025, 3, 31)),
            date(2025, 4, 30),
        )

        assert periodo.tipo == TipoPeriodo.NIVELACION
        assert periodo.inicio == date(2025, 4, 9)
        assert periodo.fin == date(2025, 4, 30)
        assert periodo.dias_facturados == 22
        assert periodo.dias_totales == 30
        assert periodo.es_prorrateado is True

    def test_primera_termina_fin_de_mes(self):
        periodo = ResolvedorPeriodo.periodo_nivelacion(date(2025, 1, 31))

        assert periodo.inicio == date(2025, 2, 1)
        assert periodo.fin == date(2025, 2, 28)
        assert periodo.dias_facturados == 28


class TestRegular:
    def test_mes_calendario(self):
        nivelacion = ResolvedorPeriodo.periodo_nivelacion(date(2025, 4, 8))

        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 3, 10))],
            _facturado(nivelacion, date(2025, 4, 30)),
            date(2025, 5, 31),
        )

        assert periodo.tipo == TipoPeriodo.REGULAR
        assert periodo.inicio == date(2025, 5, 1)
        assert periodo.fin == date(2025, 5, 31)
        assert periodo.dias_facturados == 31
        assert periodo.es_prorrateado is False

    def test_febrero_bisiesto(self):
        periodo = ResolvedorPeriodo.periodo_regular(date(2024, 2, 10))

        assert periodo.fin == date(2024, 2, 29)
        assert periodo.dias_totales == 29
        assert periodo.dias_facturados == 29

    def test_febrero_no_bisiesto(self):
        periodo = ResolvedorPeriodo.periodo_regular(date(2025, 2, 10))

        assert periodo.fin == date(2025, 2, 28)
        assert periodo.dias_totales == 28


class TestPeriodoCubierto:
    def test_fecha_dentro_del_ultimo_periodo(self):
        primera = ResolvedorPeriodo.primer_periodo(date(2025, 3, 10))

        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 3, 10))],
            _facturado(primera, date(2025, 3, 15)),
            date(2025, 4, 1),
        )

        assert periodo == primera

    def test_misma_fecha_de_referencia_devuelve_mismo_periodo(self):
        primera = ResolvedorPeriodo.primer_periodo(date(2025, 1, 15))

        periodo = ResolvedorPeriodo.resolver(
            [servicio(activacion=date(2025, 1, 15))],
            _facturado(primera, date(2025, 4, 30)),
            date(2025, 4, 30),
        )

        assert periodo == primera


class TestErrores:
    def test_sin_fecha_de_activacion(self):
        with pytest.raises(ServicioEstadoInvalido) as exc:
            ResolvedorPeriodo.resolver([servicio(activacion=None)], None, date(2025, 4, 30))

        assert exc.value.tipo == TipoIncidencia.ESTADO_SERVICIO_INVALIDO
        assert exc.value.cliente_id == 1

    def test_activacion_futura(self):
        with pytest.raises(ServicioEstadoInvalido):
            ResolvedorPeriodo.resolver(
                [servicio(activacion=date(2025, 5, 2))], None, date(2025, 4, 30)
            )

    def test_un_servicio_invalido_invalida_al_cliente(self):
        servicios = [
            servicio(servicio_id=1, activacion=date(2025, 1, 1)),
            servicio(servicio_id=2, activacion=None),
        ]

        with pytest.raises(ServicioEstadoInvalido):
            ResolvedorPeriodo.resolver(servicios, None, date(2025, 4, 30))

    @pytest.mark.parametrize("estrato", [0, 7])
    def test_estrato_fuera_de_rango(self, estrato):
        with pytest.raises(ServicioEstadoInvalido):
            ResolvedorPeriodo.resolver([servicio(estrato=estrato)], None, date(2025, 4, 30))

    def test_sin_servicios(self):
        with pytest.raises(ServicioEstadoInvalido):
            ResolvedorPeriodo.resolver([], None, date(2025, 4, 30))
