"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from loguru import logger

from app.core.config import settings


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Configura logging y valida la configuracion al inicio."""
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Entorno: {settings.ENVIRONMENT}")

        # Logging a archivo con rotacion
        app.state.log_sink_id = logger.add(
            settings.LOG_FILE,
            rotation="500 MB",
            retention="10 days",
            level=settings.LOG_LEVEL
        )

        _validate_config()
        logger.success("Aplicacion iniciada correctamente")

    return startup


def _validate_config() -> None:
    """Valida que la configuracion critica este presente."""
    warnings = []

    if not (settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD):
        warnings.append(
            "ADMIN_USERNAME/ADMIN_PASSWORD no configurados - el sync de paises respondera 503"
        )

    if not settings.DATABASE_URL and not settings.DATABASE_PASSWORD:
        warnings.append("DATABASE_URL/DATABASE_PASSWORD vacios - se usaran credenciales por defecto")

    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        # El pipeline abre y cierra su conexion por corrida: no hay pool que cerrar
        logger.info("Cerrando aplicacion...")
        logger.success("Aplicacion cerrada correctamente")

        sink_id = getattr(app.state, "log_sink_id", None)
        if sink_id is not None:
            logger.remove(sink_id)
            app.state.log_sink_id = None

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Ciclo de vida de la aplicacion: inicio antes de servir, cierre al terminar.

    Args:
        app: Instancia de FastAPI
    """
    await startup_handler(app)()
    try:
        yield
    finally:
        await shutdown_handler(app)()
