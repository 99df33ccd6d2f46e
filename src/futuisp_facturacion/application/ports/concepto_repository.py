"""Puerto (interfaz) para conceptos pendientes de facturar."""
from abc import ABC, abstractmethod

from futuisp_facturacion.domain.entities.concepto_facturable import ConceptoFacturable


class ConceptoRepository(ABC):
    """Interfaz para repositorio de conceptos."""

    @abstractmethod
    async def listar_pendientes(self, cliente_id: int) -> list[ConceptoFacturable]:
        """Conceptos pendientes del cliente, en el orden configurado."""
        pass
