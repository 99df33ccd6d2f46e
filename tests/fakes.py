"""Implementaciones en memoria de los puertos para pruebas."""
import asyncio
from datetime import date, datetime
from decimal import Decimal

from futuisp_facturacion.application.ports import (
    ConceptoRepository,
    ConfiguracionImpuestosProvider,
    FacturaRepository,
    SecuenciaProvider,
    ServicioClienteRepository,
)
from futuisp_facturacion.domain.entities import (
    ConceptoFacturable,
    Factura,
    FacturaVencida,
    ServicioCliente,
)
from futuisp_facturacion.domain.exceptions import ConflictoPersistencia
from futuisp_facturacion.domain.value_objects import (
    PeriodoFacturacion,
    PeriodoFacturado,
    TasasImpuesto,
    TipoServicio,
)

GENERADO_EN = datetime(2025, 4, 1, 8, 0, 0)


def reloj_fijo() -> datetime:
    return GENERADO_EN


def servicio(
    cliente_id: int = 1,
    servicio_id: int | None = None,
    tipo: TipoServicio = TipoServicio.INTERNET,
    precio: str = "60000",
    estrato: int = 2,
    activacion: date | None = date(2025, 1, 15),
    nombre_plan: str = "Plan 20 Mbps",
) -> ServicioCliente:
    return ServicioCliente(
        servicio_id=servicio_id if servicio_id is not None else cliente_id * 10,
        cliente_id=cliente_id,
        cliente_nombre=f"Cliente {cliente_id}",
        tipo=tipo,
        nombre_plan=nombre_plan,
        precio_mensual=Decimal(precio),
        aplica_iva=tipo != TipoServicio.INTERNET,
        estrato=estrato,
        fecha_activacion=activacion,
    )


class FakeServicioClienteRepository(ServicioClienteRepository):
    def __init__(self, servicios: list[ServicioCliente] | None = None, error: Exception | None = None):
        self.servicios = list(servicios or [])
        self.error = error

    async def listar_activos(self, fecha_referencia: date) -> list[ServicioCliente]:
        if self.error:
            raise self.error
        return [s for s in self.servicios if s.esta_activo]

    async def listar_activos_cliente(self, cliente_id: int, fecha_referencia: date) -> list[ServicioCliente]:
        return [s for s in self.servicios if s.cliente_id == cliente_id and s.esta_activo]


class FakeConceptoRepository(ConceptoRepository):
    def __init__(self, por_cliente: dict[int, list[ConceptoFacturable]] | None = None):
        self.por_cliente = por_cliente or {}
        self.facturados: set[int] = set()

    async def listar_pendientes(self, cliente_id: int) -> list[ConceptoFacturable]:
        return [
            c for c in self.por_cliente.get(cliente_id, [])
            if c.pendiente_id not in self.facturados
        ]


class FakeSecuenciaProvider(SecuenciaProvider):
    def __init__(self):
        self.ultimo = 0

    async def siguiente(self, prefijo: str) -> str:
        self.ultimo += 1
        return f"{prefijo}{self.ultimo:06d}"


class FakeFacturaRepository(FacturaRepository):
    """
    Simula la restricción única (cliente, fecha_desde, fecha_hasta).

    Como la transacción real, solo consume consecutivo si el guardado prospera.
    """

    def __init__(
        self,
        conceptos: FakeConceptoRepository | None = None,
        vencidas: dict[int, list[FacturaVencida]] | None = None,
        lento: set[int] | None = None,
        forzar_conflicto: set[int] | None = None,
        secuencias: FakeSecuenciaProvider | None = None,
    ):
        self.conceptos = conceptos
        self.vencidas = vencidas or {}
        self.lento = lento or set()
        self.forzar_conflicto = forzar_conflicto or set()
        self.secuencias = secuencias or FakeSecuenciaProvider()
        self.guardadas: dict[tuple[int, date, date], Factura] = {}
        self.llamadas_guardar = 0

    async def existe(self, cliente_id: int, periodo: PeriodoFacturacion) -> bool:
        if cliente_id in self.lento:
            await asyncio.sleep(5)
        return (cliente_id, periodo.inicio, periodo.fin) in self.guardadas

    async def guardar(self, factura: Factura, prefijo: str) -> Factura:
        self.llamadas_guardar += 1
        llave = (factura.cliente_id, factura.periodo.inicio, factura.periodo.fin)
        if llave in self.guardadas or factura.cliente_id in self.forzar_conflicto:
            raise ConflictoPersistencia("Ya existe", cliente_id=factura.cliente_id)

        numero = await self.secuencias.siguiente(prefijo)
        guardada = factura.numerada(numero).persistida(len(self.guardadas) + 1)
        self.guardadas[llave] = guardada
        if self.conceptos is not None:
            self.conceptos.facturados.update(factura.conceptos_pendientes_ids)
        return guardada

    async def obtener_ultimo_periodo(self, cliente_id: int) -> PeriodoFacturado | None:
        facturas = [f for (cid, _, _), f in self.guardadas.items() if cid == cliente_id]
        if not facturas:
            return None
        ultima = max(facturas, key=lambda f: f.periodo.fin)
        return PeriodoFacturado(periodo=ultima.periodo, fecha_referencia=ultima.fecha_referencia)

    async def listar_vencidas(self, cliente_id: int, fecha_referencia: date) -> list[FacturaVencida]:
        return list(self.vencidas.get(cliente_id, []))


class FakeConfiguracionImpuestos(ConfiguracionImpuestosProvider):
    def __init__(self, iva: str = "19", interes: str = "2", error: Exception | None = None):
        self.iva = Decimal(iva)
        self.interes = Decimal(interes)
        self.error = error

    async def tasas(self) -> TasasImpuesto:
        if self.error:
            raise self.error
        return TasasImpuesto(porcentaje_iva=self.iva, porcentaje_interes=self.interes)
