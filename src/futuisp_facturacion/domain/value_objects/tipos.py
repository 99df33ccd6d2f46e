"""Enumeraciones del dominio de facturación."""
from enum import Enum


class TipoServicio(str, Enum):
    """Tipo de servicio contratado."""

    INTERNET = "internet"
    TELEVISION = "television"
    COMBO = "combo"


class EstadoServicio(str, Enum):
    """Estado del servicio del cliente."""

    ACTIVO = "activo"
    SUSPENDIDO = "suspendido"
    CANCELADO = "cancelado"


class OrigenLinea(str, Enum):
    """Procedencia de una línea de factura."""

    SERVICIO = "SERVICIO"
    CONCEPTO = "CONCEPTO"


class TipoLinea(str, Enum):
    """Tipo de línea; el orden de declaración es el orden de presentación."""

    INTERNET = "internet"
    TELEVISION = "television"
    COMBO = "combo"
    INSTALACION = "instalacion"
    CONCEPTO = "concepto"
    INTERES = "interes"

    @property
    def orden(self) -> int:
        """Posición de la línea dentro de la factura."""
        return list(TipoLinea).index(self)

    @classmethod
    def desde_servicio(cls, tipo: TipoServicio) -> "TipoLinea":
        return cls(tipo.value)


class CategoriaConcepto(str, Enum):
    """Categorías de conceptos configurables."""

    RECONEXION = "reconexion"
    VARIOS = "varios"
    PUBLICIDAD = "publicidad"
    DESCUENTO = "descuento"
    INTERES = "interes"
    INSTALACION = "instalacion"

    @classmethod
    def normalizar(cls, valor: str | None) -> "CategoriaConcepto":
        """Convierte el texto de BD a categoría; desconocidos van a VARIOS."""
        try:
            return cls((valor or "").strip().lower())
        except ValueError:
            return cls.VARIOS


class TipoIncidencia(str, Enum):
    """Clasificación de errores y omisiones de una corrida."""

    ESTADO_SERVICIO_INVALIDO = "ESTADO_SERVICIO_INVALIDO"
    TASA_IMPUESTO_INVALIDA = "TASA_IMPUESTO_INVALIDA"
    SIN_CONCEPTOS = "SIN_CONCEPTOS"
    YA_FACTURADO = "YA_FACTURADO"
    ERROR_ENSAMBLAJE = "ERROR_ENSAMBLAJE"
    CONFLICTO_PERSISTENCIA = "CONFLICTO_PERSISTENCIA"
    ERROR_PERSISTENCIA = "ERROR_PERSISTENCIA"
    TIEMPO_EXCEDIDO = "TIEMPO_EXCEDIDO"
    ERROR_INESPERADO = "ERROR_INESPERADO"
    CANCELADO = "CANCELADO"
    ERROR_ENUMERACION = "ERROR_ENUMERACION"

    @property
    def es_omision(self) -> bool:
        """Las omisiones no cuentan como fallas de la corrida."""
        return self in (
            TipoIncidencia.SIN_CONCEPTOS,
            TipoIncidencia.YA_FACTURADO,
            TipoIncidencia.CANCELADO,
        )
