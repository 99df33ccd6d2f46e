"""Excepciones del dominio de facturación."""
from futuisp_facturacion.domain.value_objects.tipos import TipoIncidencia


class FacturacionError(Exception):
    """Error base; `tipo` es la clasificación reportada en la corrida."""

    tipo: TipoIncidencia = TipoIncidencia.ERROR_INESPERADO

    def __init__(self, mensaje: str, cliente_id: int | None = None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.cliente_id = cliente_id


class ServicioEstadoInvalido(FacturacionError):
    """Fecha de activación ausente o posterior a la fecha de referencia."""

    tipo = TipoIncidencia.ESTADO_SERVICIO_INVALIDO


class TasaImpuestoInvalida(FacturacionError):
    """Porcentaje de impuesto fuera de 0..100."""

    tipo = TipoIncidencia.TASA_IMPUESTO_INVALIDA


class SinConceptosFacturables(FacturacionError):
    """El cliente no tiene nada que cobrar en el período."""

    tipo = TipoIncidencia.SIN_CONCEPTOS


class YaFacturado(FacturacionError):
    """Ya existe factura para el cliente y período."""

    tipo = TipoIncidencia.YA_FACTURADO


class ErrorEnsamblaje(FacturacionError):
    """Falla al ensamblar la factura; envuelve la causa original."""

    tipo = TipoIncidencia.ERROR_ENSAMBLAJE


class ConflictoPersistencia(FacturacionError):
    """La restricción única (cliente, período) rechazó la inserción."""

    tipo = TipoIncidencia.CONFLICTO_PERSISTENCIA


class ErrorPersistencia(FacturacionError):
    """Falla de infraestructura al guardar o numerar una factura."""

    tipo = TipoIncidencia.ERROR_PERSISTENCIA


class TransicionCorridaInvalida(FacturacionError):
    """Operación no permitida en el estado actual de la corrida."""
