"""Contexto inmutable de una corrida de facturación."""
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class TasasImpuesto:
    """Snapshot de la configuración de impuestos."""

    porcentaje_iva: Decimal
    porcentaje_interes: Decimal  # Mensual, sobre saldo vencido


@dataclass(frozen=True)
class ParametrosFacturacion:
    """Parámetros fijos de facturación tomados de la configuración."""

    prefijo: str = "FAC"
    valor_instalacion: Decimal = Decimal("42016")
    instalacion_aplica_iva: bool = True
    dias_vencimiento: int = 15
    dias_mora_interes: int = 30


@dataclass(frozen=True)
class ContextoFacturacion:
    """
    Se construye una vez por corrida y se descarta al finalizar.

    Reúne todo lo que los servicios de dominio necesitan fuera de los
    datos del cliente: fecha de referencia, tasas y reloj de generación.
    """

    fecha_referencia: date
    tasas: TasasImpuesto
    parametros: ParametrosFacturacion
    generado_en: datetime
