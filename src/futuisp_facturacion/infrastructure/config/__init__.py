"""Módulo de configuración."""
from futuisp_facturacion.infrastructure.config.settings import get_settings
from futuisp_facturacion.infrastructure.config.logging import setup_logging, logger

__all__ = ["get_settings", "setup_logging", "logger"]
