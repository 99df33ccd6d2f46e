"""Configuración de logging estructurado."""
import logging
import sys

APP_LOGGER = "futuisp_facturacion"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configura logging para toda la aplicación.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Logger configurado
    """
    log_format = (
        "%(asctime)s | %(levelname)-8s | %(name)-30s | "
        "%(funcName)-20s | %(message)s"
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(APP_LOGGER)
    handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S"))

    # Logger raíz; evita handlers duplicados si se llama dos veces
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    if not any(h.get_name() == APP_LOGGER for h in root_logger.handlers):
        root_logger.addHandler(handler)

    # Reducir ruido de librerías externas
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiomysql").setLevel(logging.WARNING)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(getattr(logging, level.upper()))

    return app_logger


# Logger global de la aplicación
logger = logging.getLogger(APP_LOGGER)
