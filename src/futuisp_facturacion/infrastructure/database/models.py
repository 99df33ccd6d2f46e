"""Modelos SQLAlchemy de facturación."""
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Clase base para modelos."""
    pass


class Cliente(Base):
    """Modelo de clientes."""
    __tablename__ = "clientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    numero_identificacion: Mapped[str] = mapped_column(String(20))
    nombres: Mapped[str] = mapped_column(String(100))
    apellidos: Mapped[str] = mapped_column(String(100), default="")
    estrato: Mapped[int | None] = mapped_column(Integer, nullable=True)
    estado: Mapped[str] = mapped_column(String(20), default="activo")
    activo: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relaciones
    servicios: Mapped[list["ServicioClienteModel"]] = relationship(back_populates="cliente")

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombres} {self.apellidos}".strip()


class PlanServicio(Base):
    """Modelo de planes comerciales."""
    __tablename__ = "planes_servicio"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    codigo: Mapped[str] = mapped_column(String(20))
    nombre: Mapped[str] = mapped_column(String(100))
    tipo: Mapped[str] = mapped_column(String(20))  # internet | television | combo
    precio: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    aplica_iva: Mapped[bool] = mapped_column(Boolean, default=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True)


class ServicioClienteModel(Base):
    """Modelo de servicios contratados."""
    __tablename__ = "servicios_cliente"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cliente_id: Mapped[int] = mapped_column(Integer, ForeignKey("clientes.id"))
    plan_id: Mapped[int] = mapped_column(Integer, ForeignKey("planes_servicio.id"))
    precio_personalizado: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    fecha_activacion: Mapped[date | None] = mapped_column(Date, nullable=True)
    estado: Mapped[str] = mapped_column(String(20), default="activo")
    activo: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relaciones
    cliente: Mapped["Cliente"] = relationship(back_populates="servicios")
    plan: Mapped["PlanServicio"] = relationship()


class ConceptoFacturacion(Base):
    """Catálogo de conceptos facturables."""
    __tablename__ = "conceptos_facturacion"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    codigo: Mapped[str] = mapped_column(String(20))
    nombre: Mapped[str] = mapped_column(String(100))
    tipo: Mapped[str] = mapped_column(String(20))  # CategoriaConcepto
    aplica_iva: Mapped[bool] = mapped_column(Boolean, default=False)
    porcentaje_iva: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=Decimal("0"))
    orden: Mapped[int] = mapped_column(Integer, default=0)
    activo: Mapped[bool] = mapped_column(Boolean, default=True)


class ConceptoPendiente(Base):
    """Cargos únicos esperando la próxima factura del cliente."""
    __tablename__ = "conceptos_pendientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    cliente_id: Mapped[int] = mapped_column(Integer, ForeignKey("clientes.id"))
    concepto_id: Mapped[int] = mapped_column(Integer, ForeignKey("conceptos_facturacion.id"))
    valor: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    observaciones: Mapped[str | None] = mapped_column(String(255), nullable=True)
    estado: Mapped[str] = mapped_column(String(20), default="pendiente")  # pendiente | facturado
    factura_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("facturas.id"), nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relaciones
    concepto: Mapped["ConceptoFacturacion"] = relationship()


class FacturaModel(Base):
    """Modelo de facturas."""
    __tablename__ = "facturas"
    __table_args__ = (
        UniqueConstraint(
            "cliente_id", "fecha_desde", "fecha_hasta",
            name="uq_factura_cliente_periodo",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    numero_factura: Mapped[str] = mapped_column(String(20), unique=True)
    cliente_id: Mapped[int] = mapped_column(Integer, ForeignKey("clientes.id"))
    nombre_cliente: Mapped[str] = mapped_column(String(200))
    periodo_facturacion: Mapped[str] = mapped_column(String(50))
    tipo_periodo: Mapped[str] = mapped_column(String(20))
    dias_facturados: Mapped[int] = mapped_column(Integer)
    dias_totales: Mapped[int] = mapped_column(Integer)
    es_prorrateado: Mapped[bool] = mapped_column(Boolean, default=False)
    fecha_emision: Mapped[date] = mapped_column(Date)
    fecha_vencimiento: Mapped[date] = mapped_column(Date)
    fecha_desde: Mapped[date] = mapped_column(Date)
    fecha_hasta: Mapped[date] = mapped_column(Date)
    fecha_referencia: Mapped[date | None] = mapped_column(Date, nullable=True)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    iva: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    pagado: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"))
    estado: Mapped[str] = mapped_column(String(20), default="emitida")  # emitida | vencida | pagada | anulada
    activo: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    # Relaciones
    detalles: Mapped[list["FacturaDetalle"]] = relationship(
        back_populates="factura", cascade="all, delete-orphan"
    )


class FacturaDetalle(Base):
    """Líneas de una factura."""
    __tablename__ = "facturas_detalle"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    factura_id: Mapped[int] = mapped_column(Integer, ForeignKey("facturas.id"))
    orden: Mapped[int] = mapped_column(Integer)
    origen: Mapped[str] = mapped_column(String(20))
    tipo_concepto: Mapped[str] = mapped_column(String(20))
    concepto: Mapped[str] = mapped_column(String(255))
    valor_base: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    aplica_iva: Mapped[bool] = mapped_column(Boolean, default=False)
    porcentaje_iva: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    valor_iva: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    valor_total: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    concepto_pendiente_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relaciones
    factura: Mapped["FacturaModel"] = relationship(back_populates="detalles")


class ConsecutivoFactura(Base):
    """Último número emitido por prefijo."""
    __tablename__ = "consecutivos_factura"

    prefijo: Mapped[str] = mapped_column(String(10), primary_key=True)
    ultimo_numero: Mapped[int] = mapped_column(Integer, default=0)


class ConfiguracionFacturacion(Base):
    """Parámetros clave/valor de facturación."""
    __tablename__ = "configuracion_facturacion"

    clave: Mapped[str] = mapped_column(String(50), primary_key=True)
    valor: Mapped[str] = mapped_column(String(100))
