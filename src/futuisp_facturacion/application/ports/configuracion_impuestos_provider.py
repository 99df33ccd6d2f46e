"""Puerto (interfaz) para la configuración de impuestos."""
from abc import ABC, abstractmethod

from futuisp_facturacion.domain.value_objects.contexto_facturacion import TasasImpuesto


class ConfiguracionImpuestosProvider(ABC):
    """Snapshot de porcentajes de IVA e interés de mora."""

    @abstractmethod
    async def tasas(self) -> TasasImpuesto:
        pass
