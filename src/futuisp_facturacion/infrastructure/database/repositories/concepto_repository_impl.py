"""Implementación del repositorio de conceptos pendientes."""
from sqlalchemy import and_, select

from futuisp_facturacion.application.ports.concepto_repository import ConceptoRepository
from futuisp_facturacion.domain.entities.concepto_facturable import ConceptoFacturable
from futuisp_facturacion.domain.value_objects.tipos import CategoriaConcepto
from futuisp_facturacion.infrastructure.database.connection import DatabaseManager
from futuisp_facturacion.infrastructure.database.models import (
    ConceptoFacturacion,
    ConceptoPendiente,
)


class ConceptoRepositoryImpl(ConceptoRepository):
    """Lee conceptos pendientes con los datos de su catálogo."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def listar_pendientes(self, cliente_id: int) -> list[ConceptoFacturable]:
        query = (
            select(
                ConceptoPendiente.id,
                ConceptoPendiente.valor,
                ConceptoPendiente.observaciones,
                ConceptoFacturacion.codigo,
                ConceptoFacturacion.nombre,
                ConceptoFacturacion.tipo,
                ConceptoFacturacion.aplica_iva,
                ConceptoFacturacion.porcentaje_iva,
            )
            .join(ConceptoFacturacion, ConceptoPendiente.concepto_id == ConceptoFacturacion.id)
            .where(
                and_(
                    ConceptoPendiente.cliente_id == cliente_id,
                    ConceptoPendiente.estado == "pendiente",
                    ConceptoPendiente.activo.is_(True),
                )
            )
            .order_by(ConceptoFacturacion.orden, ConceptoPendiente.id)
        )

        async with self.db.get_session() as session:
            result = await session.execute(query)
            rows = result.all()

        return [
            ConceptoFacturable(
                pendiente_id=row.id,
                codigo=row.codigo,
                nombre=row.observaciones or row.nombre,
                valor_base=row.valor,
                aplica_iva=bool(row.aplica_iva),
                porcentaje_iva=row.porcentaje_iva,
                categoria=CategoriaConcepto.normalizar(row.tipo),
            )
            for row in rows
        ]
