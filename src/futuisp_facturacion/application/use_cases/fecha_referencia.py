"""Resolución de la fecha de referencia de una corrida."""
import calendar
from datetime import date


def fecha_desde_periodo(periodo: str) -> date:
    """
    Convierte 'YYYY-MM' en el último día de ese mes.

    Raises:
        ValueError: si el texto no tiene el formato esperado
    """
    try:
        año_txt, mes_txt = periodo.split("-")
        año, mes = int(año_txt), int(mes_txt)
        _, ultimo_dia = calendar.monthrange(año, mes)
    except (ValueError, calendar.IllegalMonthError) as e:
        raise ValueError(f"Período inválido '{periodo}', se espera YYYY-MM") from e
    return date(año, mes, ultimo_dia)


def resolver_fecha_referencia(
    periodo: str | None = None,
    fecha_referencia: date | None = None,
    hoy: date | None = None,
) -> date:
    """La fecha explícita gana; luego el período; si no, hoy."""
    if fecha_referencia is not None:
        return fecha_referencia
    if periodo:
        return fecha_desde_periodo(periodo)
    return hoy or date.today()
