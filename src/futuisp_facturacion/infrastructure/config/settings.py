"""Configuración centralizada de la aplicación."""
from decimal import Decimal
from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración de la aplicación."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    # Database
    db_host: str = "localhost"
    db_port: int = 3306
    db_name: str = "futuisp"
    db_user: str = "root"
    db_password: str
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle: int = 3600

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    api_workers: int = 4

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_ttl: int = 300
    redis_ttl_preview: int = 120

    # Aplicación
    app_name: str = "FUTUISP Facturación"
    app_version: str = "0.1.0"
    debug: bool = False

    # Facturación
    facturacion_prefijo: str = "FAC"
    facturacion_max_workers: int = Field(default=8, ge=1)
    facturacion_timeout_cliente: float = Field(default=30.0, gt=0)
    facturacion_valor_instalacion: Decimal = Decimal("42016")
    facturacion_instalacion_aplica_iva: bool = True
    facturacion_dias_vencimiento: int = 15
    facturacion_dias_mora_interes: int = 30
    facturacion_porcentaje_iva: Decimal = Decimal("19")  # Si no está en BD
    facturacion_porcentaje_interes: Decimal = Decimal("2")  # Mensual, si no está en BD

    @property
    def database_url(self) -> str:
        """URL de conexión a la base de datos con password encoding."""
        # Escapar caracteres especiales en password
        encoded_password = quote_plus(self.db_password)

        return (
            f"mysql+aiomysql://{self.db_user}:{encoded_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
            "?charset=utf8mb4"
        )


@lru_cache
def get_settings() -> Settings:
    """Obtiene instancia única de configuración."""
    return Settings()
