"""Puerto (interfaz) para repositorio de servicios de clientes."""
from abc import ABC, abstractmethod
from datetime import date

from futuisp_facturacion.domain.entities.servicio_cliente import ServicioCliente


class ServicioClienteRepository(ABC):
    """Interfaz para lectura de servicios activos."""

    @abstractmethod
    async def listar_activos(self, fecha_referencia: date) -> list[ServicioCliente]:
        """Servicios activos de todos los clientes a la fecha de referencia."""
        pass

    @abstractmethod
    async def listar_activos_cliente(
        self,
        cliente_id: int,
        fecha_referencia: date,
    ) -> list[ServicioCliente]:
        """Servicios activos de un cliente."""
        pass
