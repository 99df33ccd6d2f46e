"""Puerto (interfaz) para numeración consecutiva de facturas."""
from abc import ABC, abstractmethod


class SecuenciaProvider(ABC):
    """Entrega números de factura monótonos y sin huecos por prefijo."""

    @abstractmethod
    async def siguiente(self, prefijo: str) -> str:
        """Reserva y devuelve el siguiente número (ej: FAC000123)."""
        pass
