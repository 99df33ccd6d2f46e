"""Implementación del repositorio de facturas."""
from datetime import date

from sqlalchemy import and_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from futuisp_facturacion.application.ports.factura_repository import FacturaRepository
from futuisp_facturacion.domain.entities.factura import Factura
from futuisp_facturacion.domain.entities.factura_vencida import FacturaVencida
from futuisp_facturacion.domain.exceptions import ConflictoPersistencia, ErrorPersistencia
from futuisp_facturacion.domain.value_objects.periodo_facturacion import (
    PeriodoFacturacion,
    PeriodoFacturado,
    TipoPeriodo,
)
from futuisp_facturacion.infrastructure.config.logging import logger
from futuisp_facturacion.infrastructure.database.connection import DatabaseManager
from futuisp_facturacion.infrastructure.database.models import (
    ConceptoPendiente,
    FacturaDetalle,
    FacturaModel,
)
from futuisp_facturacion.infrastructure.database.repositories.secuencia_provider_impl import (
    SecuenciaProviderImpl,
)

ESTADOS_CON_SALDO = ("emitida", "vencida")


class FacturaRepositoryImpl(FacturaRepository):
    """Implementación de repositorio de facturas."""

    def __init__(self, db: DatabaseManager, secuencias: SecuenciaProviderImpl):
        self.db = db
        self.secuencias = secuencias

    async def existe(self, cliente_id: int, periodo: PeriodoFacturacion) -> bool:
        # Misma llave que la restricción única, sin filtrar anuladas
        query = (
            select(FacturaModel.id)
            .where(
                and_(
                    FacturaModel.cliente_id == cliente_id,
                    FacturaModel.fecha_desde == periodo.inicio,
                    FacturaModel.fecha_hasta == periodo.fin,
                )
            )
            .limit(1)
        )

        async with self.db.get_session() as session:
            result = await session.execute(query)
            return result.scalar_one_or_none() is not None

    async def guardar(self, factura: Factura, prefijo: str) -> Factura:
        """
        Numera e inserta la factura con su detalle en una sola transacción.

        El consecutivo, la factura y la marca de los conceptos pendientes
        se confirman juntos; ante conflicto o error el rollback libera el
        número reservado.
        """
        try:
            async with self.db.get_session() as session:
                numero = await self.secuencias.siguiente(prefijo, session=session)
                factura = factura.numerada(numero)

                modelo = self._a_modelo(factura)
                session.add(modelo)
                await session.flush()

                pendientes = factura.conceptos_pendientes_ids
                if pendientes:
                    await session.execute(
                        update(ConceptoPendiente)
                        .where(
                            and_(
                                ConceptoPendiente.id.in_(pendientes),
                                ConceptoPendiente.estado == "pendiente",
                            )
                        )
                        .values(estado="facturado", factura_id=modelo.id)
                    )

                factura_id = modelo.id
        except IntegrityError as e:
            raise ConflictoPersistencia(
                f"Ya existe factura para {factura.periodo.etiqueta}",
                cliente_id=factura.cliente_id,
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Error guardando factura del cliente {factura.cliente_id}: {e}")
            raise ErrorPersistencia(str(e), cliente_id=factura.cliente_id) from e

        logger.debug(f"Factura {factura.numero} guardada (id={factura_id})")
        return factura.persistida(factura_id)

    async def obtener_ultimo_periodo(self, cliente_id: int) -> PeriodoFacturado | None:
        query = (
            select(FacturaModel)
            .where(
                and_(
                    FacturaModel.cliente_id == cliente_id,
                    FacturaModel.activo.is_(True),
                    FacturaModel.estado != "anulada",
                )
            )
            .order_by(FacturaModel.fecha_hasta.desc())
            .limit(1)
        )

        async with self.db.get_session() as session:
            result = await session.execute(query)
            fila = result.scalar_one_or_none()

        if fila is None:
            return None

        periodo = PeriodoFacturacion(
            inicio=fila.fecha_desde,
            fin=fila.fecha_hasta,
            dias_totales=fila.dias_totales,
            dias_facturados=fila.dias_facturados,
            es_prorrateado=fila.es_prorrateado,
            tipo=TipoPeriodo(fila.tipo_periodo),
        )
        # Facturas antiguas sin fecha de referencia: se asume la de emisión
        return PeriodoFacturado(
            periodo=periodo,
            fecha_referencia=fila.fecha_referencia or fila.fecha_emision,
        )

    async def listar_vencidas(
        self,
        cliente_id: int,
        fecha_referencia: date,
    ) -> list[FacturaVencida]:
        query = (
            select(
                FacturaModel.id,
                FacturaModel.numero_factura,
                FacturaModel.total,
                FacturaModel.pagado,
                FacturaModel.fecha_vencimiento,
            )
            .where(
                and_(
                    FacturaModel.cliente_id == cliente_id,
                    FacturaModel.activo.is_(True),
                    FacturaModel.estado.in_(ESTADOS_CON_SALDO),
                    FacturaModel.fecha_vencimiento < fecha_referencia,
                    FacturaModel.total > FacturaModel.pagado,
                )
            )
            .order_by(FacturaModel.fecha_vencimiento)
        )

        async with self.db.get_session() as session:
            result = await session.execute(query)
            rows = result.all()

        return [
            FacturaVencida(
                factura_id=row.id,
                numero=row.numero_factura,
                total=row.total,
                pagado=row.pagado,
                fecha_vencimiento=row.fecha_vencimiento,
            )
            for row in rows
        ]

    @staticmethod
    def _a_modelo(factura: Factura) -> FacturaModel:
        periodo = factura.periodo
        return FacturaModel(
            numero_factura=factura.numero,
            cliente_id=factura.cliente_id,
            nombre_cliente=factura.cliente_nombre,
            periodo_facturacion=periodo.etiqueta,
            tipo_periodo=periodo.tipo.value,
            dias_facturados=periodo.dias_facturados,
            dias_totales=periodo.dias_totales,
            es_prorrateado=periodo.es_prorrateado,
            fecha_emision=factura.fecha_emision,
            fecha_vencimiento=factura.fecha_vencimiento,
            fecha_desde=periodo.inicio,
            fecha_hasta=periodo.fin,
            fecha_referencia=factura.fecha_referencia,
            subtotal=factura.subtotal,
            iva=factura.total_iva,
            total=factura.total,
            estado="emitida",
            detalles=[
                FacturaDetalle(
                    orden=orden,
                    origen=linea.origen.value,
                    tipo_concepto=linea.tipo.value,
                    concepto=linea.descripcion,
                    valor_base=linea.base,
                    aplica_iva=linea.porcentaje_iva > 0,
                    porcentaje_iva=linea.porcentaje_iva,
                    valor_iva=linea.iva,
                    valor_total=linea.total,
                    concepto_pendiente_id=linea.concepto_pendiente_id,
                )
                for orden, linea in enumerate(factura.lineas, start=1)
            ],
        )
