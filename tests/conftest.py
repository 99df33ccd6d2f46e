import os
from datetime import date
from decimal import Decimal

import pytest

# Settings exige DB_PASSWORD; se define antes de importar la app
os.environ.setdefault("DB_PASSWORD", "test")

from futuisp_facturacion.domain.value_objects import (  # noqa: E402
    ContextoFacturacion,
    ParametrosFacturacion,
    TasasImpuesto,
)
from tests.fakes import GENERADO_EN  # noqa: E402


@pytest.fixture
def tasas() -> TasasImpuesto:
    return TasasImpuesto(porcentaje_iva=Decimal("19"), porcentaje_interes=Decimal("2"))


@pytest.fixture
def contexto(tasas: TasasImpuesto) -> ContextoFacturacion:
    return ContextoFacturacion(
        fecha_referencia=date(2025, 4, 30),
        tasas=tasas,
        parametros=ParametrosFacturacion(),
        generado_en=GENERADO_EN,
    )
