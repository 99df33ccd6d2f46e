"""
Orquestador de la facturación masiva.

Recorre la población de clientes con servicios activos y ejecuta, por
cliente: período → conceptos → IVA → ensamblaje → (numeración y guardado).
"""
import asyncio
from collections import defaultdict
from datetime import date, datetime
from typing import Callable

from futuisp_facturacion.application.ports.concepto_repository import ConceptoRepository
from futuisp_facturacion.application.ports.configuracion_impuestos_provider import (
    ConfiguracionImpuestosProvider,
)
from futuisp_facturacion.application.ports.factura_repository import FacturaRepository
from futuisp_facturacion.application.ports.servicio_cliente_repository import (
    ServicioClienteRepository,
)
from futuisp_facturacion.domain.entities.corrida_facturacion import (
    CorridaFacturacion,
    Incidencia,
    ModoCorrida,
    ResultadoCliente,
)
from futuisp_facturacion.domain.entities.factura import Factura
from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente
from futuisp_facturacion.domain.exceptions import (
    ConflictoPersistencia,
    FacturacionError,
    TasaImpuestoInvalida,
    YaFacturado,
)
from futuisp_facturacion.domain.services.agregador_conceptos import AgregadorConceptos
from futuisp_facturacion.domain.services.calculadora_iva import CalculadoraIVA
from futuisp_facturacion.domain.services.ensamblador_factura import EnsambladorFactura
from futuisp_facturacion.domain.services.periodo_resolver import ResolvedorPeriodo
from futuisp_facturacion.domain.value_objects.contexto_facturacion import (
    ContextoFacturacion,
    ParametrosFacturacion,
)
from futuisp_facturacion.domain.value_objects.tipos import TipoIncidencia
from futuisp_facturacion.infrastructure.config.logging import logger


class OrquestadorFacturacion:
    """
    Ejecuta corridas de facturación en modo preview o ejecución.

    Los clientes se procesan con un pool acotado de tareas asyncio; cada
    tarea deja su resultado en una cola y un único lazo coordinador lo
    registra en la corrida. El fallo de un cliente nunca detiene la corrida.
    """

    def __init__(
        self,
        servicios_repo: ServicioClienteRepository,
        conceptos_repo: ConceptoRepository,
        facturas_repo: FacturaRepository,
        impuestos: ConfiguracionImpuestosProvider,
        parametros: ParametrosFacturacion | None = None,
        max_workers: int = 8,
        timeout_cliente: float = 30.0,
        reloj: Callable[[], datetime] = datetime.now,
    ):
        if max_workers < 1:
            raise ValueError("max_workers debe ser >= 1")

        self.servicios_repo = servicios_repo
        self.conceptos_repo = conceptos_repo
        self.facturas_repo = facturas_repo
        self.impuestos = impuestos
        self.parametros = parametros or ParametrosFacturacion()
        self.max_workers = max_workers
        self.timeout_cliente = timeout_cliente
        self._reloj = reloj

    async def preview(
        self,
        fecha_referencia: date,
        cancelacion: asyncio.Event | None = None,
    ) -> CorridaFacturacion:
        """Calcula todas las facturas sin guardar ni numerar."""
        return await self._correr(fecha_referencia, ModoCorrida.PREVIEW, cancelacion)

    async def ejecutar(
        self,
        fecha_referencia: date,
        cancelacion: asyncio.Event | None = None,
    ) -> CorridaFacturacion:
        """Calcula, numera y guarda las facturas del período."""
        return await self._correr(fecha_referencia, ModoCorrida.EJECUCION, cancelacion)

    async def previsualizar_cliente(
        self,
        cliente_id: int,
        fecha_referencia: date,
    ) -> ResultadoCliente | None:
        """
        Preview de un solo cliente.

        Returns:
            Factura sin número, Incidencia si el cálculo falla u omite,
            o None si el cliente no tiene servicios activos
        """
        servicios = await self.servicios_repo.listar_activos_cliente(cliente_id, fecha_referencia)
        if not servicios:
            return None

        try:
            contexto = await self._crear_contexto(fecha_referencia)
        except TasaImpuestoInvalida as e:
            return Incidencia(cliente_id=cliente_id, tipo=e.tipo, mensaje=e.mensaje)

        return await self._procesar_acotado(
            cliente_id, servicios, contexto, ModoCorrida.PREVIEW
        )

    async def _correr(
        self,
        fecha_referencia: date,
        modo: ModoCorrida,
        cancelacion: asyncio.Event | None,
    ) -> CorridaFacturacion:
        corrida = CorridaFacturacion(fecha_referencia=fecha_referencia, modo=modo)
        corrida.iniciar(self._reloj())
        logger.info(f"Corrida {modo.value} iniciada para {fecha_referencia}")

        try:
            contexto = await self._crear_contexto(fecha_referencia)
            servicios = await self.servicios_repo.listar_activos(fecha_referencia)
        except TasaImpuestoInvalida as e:
            logger.error(f"Corrida {modo.value} abortada: {e.mensaje}")
            corrida.registrar_error_general(
                Incidencia(cliente_id=None, tipo=e.tipo, mensaje=e.mensaje)
            )
            corrida.finalizar(self._reloj())
            return corrida
        except Exception as e:
            logger.error(f"No se pudo enumerar clientes: {e}", exc_info=True)
            corrida.registrar_error_general(
                Incidencia(
                    cliente_id=None,
                    tipo=TipoIncidencia.ERROR_ENUMERACION,
                    mensaje=str(e),
                )
            )
            corrida.finalizar(self._reloj())
            return corrida

        por_cliente = agrupar_por_cliente(servicios)
        cola: asyncio.Queue[ResultadoCliente] = asyncio.Queue()
        semaforo = asyncio.Semaphore(self.max_workers)

        async def trabajador(cliente_id: int, servicios_cliente: list[ServicioCliente]) -> None:
            async with semaforo:
                if cancelacion is not None and cancelacion.is_set():
                    resultado = Incidencia(
                        cliente_id=cliente_id,
                        tipo=TipoIncidencia.CANCELADO,
                        mensaje="Corrida cancelada antes de procesar el cliente",
                    )
                else:
                    resultado = await self._procesar_acotado(
                        cliente_id, servicios_cliente, contexto, modo
                    )
            await cola.put(resultado)

        tareas = [
            asyncio.create_task(trabajador(cliente_id, servicios_cliente))
            for cliente_id, servicios_cliente in por_cliente.items()
        ]

        # Único escritor de la corrida
        for _ in range(len(tareas)):
            corrida.registrar(await cola.get())
        await asyncio.gather(*tareas)

        corrida.finalizar(self._reloj())
        logger.info(
            f"Corrida {modo.value} {fecha_referencia} finalizada: "
            f"{corrida.exitosas} facturas, {corrida.fallidas} errores, "
            f"{corrida.omitidas} omisiones de {corrida.clientes_intentados} clientes"
        )
        return corrida

    async def _crear_contexto(self, fecha_referencia: date) -> ContextoFacturacion:
        tasas = CalculadoraIVA.validar_tasas(await self.impuestos.tasas())
        return ContextoFacturacion(
            fecha_referencia=fecha_referencia,
            tasas=tasas,
            parametros=self.parametros,
            generado_en=self._reloj(),
        )

    async def _procesar_acotado(
        self,
        cliente_id: int,
        servicios: list[ServicioCliente],
        contexto: ContextoFacturacion,
        modo: ModoCorrida,
    ) -> ResultadoCliente:
        """Procesa un cliente con timeout y convierte toda falla en Incidencia."""
        try:
            return await asyncio.wait_for(
                self._procesar_cliente(cliente_id, servicios, contexto, modo),
                timeout=self.timeout_cliente,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Cliente {cliente_id}: tiempo excedido ({self.timeout_cliente}s)")
            return Incidencia(
                cliente_id=cliente_id,
                tipo=TipoIncidencia.TIEMPO_EXCEDIDO,
                mensaje=f"Procesamiento excedió {self.timeout_cliente} segundos",
            )
        except ConflictoPersistencia as e:
            # Otra corrida ganó la carrera por el mismo período
            return Incidencia(
                cliente_id=cliente_id,
                tipo=TipoIncidencia.YA_FACTURADO,
                mensaje=e.mensaje,
            )
        except FacturacionError as e:
            if not e.tipo.es_omision:
                logger.warning(f"Cliente {cliente_id}: {e.tipo.value} - {e.mensaje}")
            return Incidencia(cliente_id=cliente_id, tipo=e.tipo, mensaje=e.mensaje)
        except Exception as e:
            logger.error(f"Cliente {cliente_id}: error inesperado: {e}", exc_info=True)
            return Incidencia(
                cliente_id=cliente_id,
                tipo=TipoIncidencia.ERROR_INESPERADO,
                mensaje=str(e),
            )

    async def _procesar_cliente(
        self,
        cliente_id: int,
        servicios: list[ServicioCliente],
        contexto: ContextoFacturacion,
        modo: ModoCorrida,
    ) -> Factura:
        ultimo = await self.facturas_repo.obtener_ultimo_periodo(cliente_id)
        periodo = ResolvedorPeriodo.resolver(servicios, ultimo, contexto.fecha_referencia)

        if await self.facturas_repo.existe(cliente_id, periodo):
            raise YaFacturado(
                f"Período {periodo.etiqueta} ya facturado",
                cliente_id=cliente_id,
            )

        conceptos = await self.conceptos_repo.listar_pendientes(cliente_id)
        vencidas = await self.facturas_repo.listar_vencidas(
            cliente_id, contexto.fecha_referencia
        )

        lineas = AgregadorConceptos.agregar(servicios, periodo, conceptos, vencidas, contexto)
        factura = EnsambladorFactura.ensamblar(
            cliente_id=cliente_id,
            cliente_nombre=servicios[0].cliente_nombre,
            periodo=periodo,
            lineas_base=lineas,
            contexto=contexto,
        )

        if modo == ModoCorrida.PREVIEW:
            return factura

        return await self.facturas_repo.guardar(factura, self.parametros.prefijo)


def agrupar_por_cliente(
    servicios: list[ServicioCliente],
) -> dict[int, list[ServicioCliente]]:
    """Agrupa los servicios por cliente, en orden de cliente_id."""
    grupos: dict[int, list[ServicioCliente]] = defaultdict(list)
    for servicio in servicios:
        grupos[servicio.cliente_id].append(servicio)
    return {cliente_id: grupos[cliente_id] for cliente_id in sorted(grupos)}
