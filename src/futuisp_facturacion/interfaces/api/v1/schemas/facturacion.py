"""Schemas Pydantic para endpoints de facturación."""
from datetime import date, datetime

from pydantic import BaseModel, Field


class PeriodoSchema(BaseModel):
    """Período cobrado."""
    inicio: date = Field(..., examples=["2025-03-10"])
    fin: date = Field(..., examples=["2025-04-08"])
    tipo: str = Field(..., description="PRIMERA, NIVELACION o REGULAR", examples=["PRIMERA"])
    descripcion: str
    dias_totales: int = Field(..., examples=[30])
    dias_facturados: int = Field(..., examples=[30])
    es_prorrateado: bool


class LineaSchema(BaseModel):
    """Línea de factura."""
    origen: str = Field(..., description="SERVICIO o CONCEPTO")
    tipo: str = Field(..., description="internet, television, combo, instalacion, concepto, interes")
    descripcion: str
    base: int = Field(..., description="Valor antes de IVA (pesos)", examples=[45000])
    porcentaje_iva: float = Field(..., examples=[19.0])
    iva: int = Field(..., examples=[8550])
    total: int = Field(..., examples=[53550])


class FacturaSchema(BaseModel):
    """Factura calculada o generada."""
    cliente_id: int
    cliente_nombre: str
    numero: str | None = Field(None, description="Solo en ejecución", examples=["FAC000123"])
    factura_id: int | None = Field(None, description="Solo en ejecución")
    periodo: PeriodoSchema
    fecha_emision: date
    fecha_vencimiento: date
    subtotal: int
    iva: int
    total: int
    lineas: list[LineaSchema]


class IncidenciaSchema(BaseModel):
    """Error u omisión de un cliente."""
    cliente_id: int | None = Field(None, description="None para errores generales de la corrida")
    tipo: str = Field(..., examples=["ESTADO_SERVICIO_INVALIDO"])
    mensaje: str


class TotalesSchema(BaseModel):
    """Totales de las facturas generadas."""
    subtotal: int
    iva: int
    total: int


class DesgloseLineaSchema(BaseModel):
    """Agregado por tipo de línea."""
    tipo: str
    lineas: int
    base: int
    iva: int
    total: int


class DesglosePeriodoSchema(BaseModel):
    """Agregado por tipo de período."""
    tipo_periodo: str
    facturas: int
    subtotal: int
    iva: int
    total: int


class ResultadoCorridaResponse(BaseModel):
    """Resultado de una corrida de facturación (preview o ejecución)."""
    fecha_referencia: date
    modo: str = Field(..., description="PREVIEW o EJECUCION")
    estado: str = Field(..., examples=["FINALIZADA"])
    iniciada_en: datetime | None = None
    finalizada_en: datetime | None = None
    clientes_intentados: int
    exitosas: int = Field(..., description="Facturas generadas")
    fallidas: int = Field(..., description="Errores (incluye errores generales)")
    omitidas: int = Field(..., description="Clientes omitidos (ya facturados, sin conceptos, cancelados)")
    totales: TotalesSchema
    por_tipo_linea: list[DesgloseLineaSchema]
    por_tipo_periodo: list[DesglosePeriodoSchema]
    facturas_generadas: list[FacturaSchema]
    errores: list[IncidenciaSchema]
    omisiones: list[IncidenciaSchema]


class PreviewClienteResponse(BaseModel):
    """Preview de la factura de un cliente."""
    cliente_id: int
    factura: FacturaSchema
