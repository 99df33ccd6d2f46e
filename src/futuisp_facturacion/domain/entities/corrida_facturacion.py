"""Entidad de corrida de facturación masiva."""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from futuisp_facturacion.domain.entities.factura import Factura
from futuisp_facturacion.domain.exceptions import TransicionCorridaInvalida
from futuisp_facturacion.domain.value_objects.tipos import TipoIncidencia


class EstadoCorrida(str, Enum):
    """Ciclo de vida de una corrida."""

    CREADA = "CREADA"
    EN_EJECUCION = "EN_EJECUCION"
    FINALIZADA = "FINALIZADA"


class ModoCorrida(str, Enum):
    """Preview no persiste; ejecución guarda y numera."""

    PREVIEW = "PREVIEW"
    EJECUCION = "EJECUCION"


@dataclass(frozen=True)
class Incidencia:
    """Error u omisión de un cliente dentro de la corrida."""

    cliente_id: int | None
    tipo: TipoIncidencia
    mensaje: str

    @property
    def es_omision(self) -> bool:
        return self.tipo.es_omision


# Resultado del procesamiento de un cliente
ResultadoCliente = Factura | Incidencia


@dataclass
class CorridaFacturacion:
    """
    Acumulador de resultados de una corrida.

    Solo admite escrituras en EN_EJECUCION; al finalizar las colecciones
    quedan como tuplas ordenadas por cliente y no se pueden modificar.
    """

    fecha_referencia: date
    modo: ModoCorrida
    estado: EstadoCorrida = EstadoCorrida.CREADA
    clientes_intentados: int = 0
    facturas_generadas: list[Factura] | tuple[Factura, ...] = field(default_factory=list)
    errores: list[Incidencia] | tuple[Incidencia, ...] = field(default_factory=list)
    omisiones: list[Incidencia] | tuple[Incidencia, ...] = field(default_factory=list)
    iniciada_en: datetime | None = None
    finalizada_en: datetime | None = None

    def iniciar(self, ahora: datetime) -> None:
        if self.estado != EstadoCorrida.CREADA:
            raise TransicionCorridaInvalida(f"No se puede iniciar una corrida {self.estado.value}")
        self.estado = EstadoCorrida.EN_EJECUCION
        self.iniciada_en = ahora

    def registrar(self, resultado: ResultadoCliente) -> None:
        """Agrega el resultado de un cliente intentado."""
        self._verificar_en_ejecucion()
        self.clientes_intentados += 1

        if isinstance(resultado, Factura):
            self.facturas_generadas.append(resultado)
        elif resultado.es_omision:
            self.omisiones.append(resultado)
        else:
            self.errores.append(resultado)

    def registrar_error_general(self, incidencia: Incidencia) -> None:
        """Error que no pertenece a un cliente (p.ej. enumeración)."""
        self._verificar_en_ejecucion()
        self.errores.append(incidencia)

    def finalizar(self, ahora: datetime) -> None:
        self._verificar_en_ejecucion()
        self.facturas_generadas = tuple(sorted(self.facturas_generadas, key=lambda f: f.cliente_id))
        self.errores = tuple(sorted(self.errores, key=_orden_incidencia))
        self.omisiones = tuple(sorted(self.omisiones, key=_orden_incidencia))
        self.estado = EstadoCorrida.FINALIZADA
        self.finalizada_en = ahora

    def _verificar_en_ejecucion(self) -> None:
        if self.estado != EstadoCorrida.EN_EJECUCION:
            raise TransicionCorridaInvalida(
                f"La corrida está {self.estado.value}; no admite cambios"
            )

    @property
    def exitosas(self) -> int:
        return len(self.facturas_generadas)

    @property
    def fallidas(self) -> int:
        return len(self.errores)

    @property
    def omitidas(self) -> int:
        return len(self.omisiones)

    @property
    def subtotal(self) -> Decimal:
        return sum((f.subtotal for f in self.facturas_generadas), Decimal("0"))

    @property
    def total_iva(self) -> Decimal:
        return sum((f.total_iva for f in self.facturas_generadas), Decimal("0"))

    @property
    def total(self) -> Decimal:
        return sum((f.total for f in self.facturas_generadas), Decimal("0"))


def _orden_incidencia(incidencia: Incidencia) -> tuple[int, int]:
    # Errores generales (sin cliente) primero
    if incidencia.cliente_id is None:
        return (0, 0)
    return (1, incidencia.cliente_id)
