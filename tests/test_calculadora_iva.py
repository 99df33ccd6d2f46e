from decimal import Decimal

import pytest

from futuisp_facturacion.domain.exceptions import TasaImpuestoInvalida
from futuisp_facturacion.domain.services.calculadora_iva import CalculadoraIVA
from futuisp_facturacion.domain.value_objects import CategoriaConcepto, TipoLinea

IVA = Decimal("19")


@pytest.mark.parametrize("estrato", [1, 2, 3])
def test_internet_estratos_bajos_exento(estrato):
    porcentaje = CalculadoraIVA.porcentaje_aplicable(TipoLinea.INTERNET, IVA, estrato=estrato)

    assert porcentaje == 0
    assert CalculadoraIVA.calcular(Decimal("60000"), porcentaje) == 0


@pytest.mark.parametrize("estrato", [4, 5, 6])
def test_internet_estratos_altos_gravado(estrato):
    porcentaje = CalculadoraIVA.porcentaje_aplicable(TipoLinea.INTERNET, IVA, estrato=estrato)

    assert CalculadoraIVA.calcular(Decimal("60000"), porcentaje) == Decimal("11400")


def test_internet_sin_estrato_usa_estrato_3():
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.INTERNET, IVA, estrato=None) == 0


def test_television_siempre_gravada():
    porcentaje = CalculadoraIVA.porcentaje_aplicable(TipoLinea.TELEVISION, IVA, estrato=1)

    assert CalculadoraIVA.calcular(Decimal("45000"), porcentaje) == Decimal("8550")


def test_combo_gravado_aun_en_estrato_bajo():
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.COMBO, IVA, estrato=2) == IVA


def test_instalacion_segun_configuracion():
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.INSTALACION, IVA, aplica_iva=True) == IVA
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.INSTALACION, IVA, aplica_iva=False) == 0


def test_concepto_usa_su_propio_porcentaje():
    porcentaje = CalculadoraIVA.porcentaje_aplicable(
        TipoLinea.CONCEPTO, IVA, aplica_iva=True, porcentaje_concepto=Decimal("5"),
        categoria=CategoriaConcepto.RECONEXION,
    )

    assert porcentaje == Decimal("5")
    assert CalculadoraIVA.calcular(Decimal("20000"), porcentaje) == Decimal("1000")


def test_concepto_sin_iva():
    porcentaje = CalculadoraIVA.porcentaje_aplicable(
        TipoLinea.CONCEPTO, IVA, aplica_iva=False, porcentaje_concepto=Decimal("19")
    )

    assert porcentaje == 0


@pytest.mark.parametrize(
    "categoria",
    [CategoriaConcepto.PUBLICIDAD, CategoriaConcepto.DESCUENTO, CategoriaConcepto.INTERES],
)
def test_categorias_exentas_ignoran_aplica_iva(categoria):
    porcentaje = CalculadoraIVA.porcentaje_aplicable(
        TipoLinea.CONCEPTO, IVA, aplica_iva=True, porcentaje_concepto=IVA, categoria=categoria
    )

    assert porcentaje == 0


def test_interes_de_mora_nunca_gravado():
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.INTERES, IVA, aplica_iva=True) == 0


def test_redondeo_half_up():
    # 150 * 19% = 28.5; el redondeo bancario daría 28
    assert CalculadoraIVA.calcular(Decimal("150"), IVA) == Decimal("29")
    assert CalculadoraIVA.redondear(Decimal("2.5")) == Decimal("3")
    assert CalculadoraIVA.redondear(Decimal("-2.5")) == Decimal("-3")


@pytest.mark.parametrize("porcentaje", ["-1", "100.01", "250"])
def test_porcentaje_invalido(porcentaje):
    with pytest.raises(TasaImpuestoInvalida):
        CalculadoraIVA.porcentaje_aplicable(TipoLinea.TELEVISION, Decimal(porcentaje))


def test_porcentaje_invalido_no_importa_si_la_linea_es_exenta():
    # Internet estrato 2 no consulta la tasa configurada
    assert CalculadoraIVA.porcentaje_aplicable(TipoLinea.INTERNET, Decimal("-5"), estrato=2) == 0
