"""Implementación del repositorio de servicios de clientes."""
from datetime import date

from sqlalchemy import and_, select

from futuisp_facturacion.application.ports.servicio_cliente_repository import (
    ServicioClienteRepository,
)
from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente
from futuisp_facturacion.domain.value_objects.tipos import EstadoServicio, TipoServicio
from futuisp_facturacion.infrastructure.config.logging import logger
from futuisp_facturacion.infrastructure.database.connection import DatabaseManager
from futuisp_facturacion.infrastructure.database.models import (
    Cliente,
    PlanServicio,
    ServicioClienteModel,
)

ESTRATO_POR_DEFECTO = 3


class ServicioClienteRepositoryImpl(ServicioClienteRepository):
    """Lee servicios activos de clientes activos."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def listar_activos(self, fecha_referencia: date) -> list[ServicioCliente]:
        # fecha_referencia no filtra: activaciones futuras se reportan como error
        return await self._consultar(self._query_base())

    async def listar_activos_cliente(
        self,
        cliente_id: int,
        fecha_referencia: date,
    ) -> list[ServicioCliente]:
        query = self._query_base().where(ServicioClienteModel.cliente_id == cliente_id)
        return await self._consultar(query)

    @staticmethod
    def _query_base():
        return (
            select(
                ServicioClienteModel.id,
                ServicioClienteModel.cliente_id,
                Cliente.nombres,
                Cliente.apellidos,
                Cliente.estrato,
                PlanServicio.tipo,
                PlanServicio.nombre.label("nombre_plan"),
                PlanServicio.precio,
                PlanServicio.aplica_iva,
                ServicioClienteModel.precio_personalizado,
                ServicioClienteModel.fecha_activacion,
                ServicioClienteModel.estado,
            )
            .join(Cliente, ServicioClienteModel.cliente_id == Cliente.id)
            .join(PlanServicio, ServicioClienteModel.plan_id == PlanServicio.id)
            .where(
                and_(
                    ServicioClienteModel.estado == EstadoServicio.ACTIVO.value,
                    ServicioClienteModel.activo.is_(True),
                    PlanServicio.activo.is_(True),
                    Cliente.activo.is_(True),
                    Cliente.estado == "activo",
                )
            )
            .order_by(ServicioClienteModel.cliente_id, ServicioClienteModel.id)
        )

    async def _consultar(self, query) -> list[ServicioCliente]:
        async with self.db.get_session() as session:
            result = await session.execute(query)
            rows = result.all()

        servicios = []
        for row in rows:
            try:
                tipo = TipoServicio(row.tipo)
            except ValueError:
                logger.warning(f"Servicio {row.id}: tipo de plan desconocido '{row.tipo}', se ignora")
                continue

            precio = row.precio_personalizado if row.precio_personalizado is not None else row.precio
            servicios.append(
                ServicioCliente(
                    servicio_id=row.id,
                    cliente_id=row.cliente_id,
                    cliente_nombre=f"{row.nombres} {row.apellidos or ''}".strip(),
                    tipo=tipo,
                    nombre_plan=row.nombre_plan,
                    precio_mensual=precio,
                    aplica_iva=bool(row.aplica_iva),
                    estrato=row.estrato if row.estrato is not None else ESTRATO_POR_DEFECTO,
                    fecha_activacion=row.fecha_activacion,
                    estado=EstadoServicio(row.estado),
                )
            )

        return servicios
