"""Schemas de request."""
from datetime import date

from pydantic import BaseModel, Field

PATRON_PERIODO = r"^\d{4}-(0[1-9]|1[0-2])$"


class EjecutarFacturacionRequest(BaseModel):
    """Request para ejecutar la facturación masiva."""

    periodo: str | None = Field(
        None,
        pattern=PATRON_PERIODO,
        description="Mes a facturar (YYYY-MM); se usa su último día como referencia",
        examples=["2025-04"],
    )
    fecha_referencia: date | None = Field(
        None,
        description="Fecha de referencia explícita (YYYY-MM-DD); tiene prioridad sobre periodo",
        examples=["2025-04-30"],
    )
